import importlib
import traceback
from typing import Any, Type

from sudoku.utils.log import get_logger


class Registry(object):
    """A name -> class lookup table with lazily imported defaults."""

    def __init__(self, name: str, default_mapping: dict = {}):
        """
        Args:
            name (`str`): The name of the registry.
            default_mapping (`dict`): Default mapping from keys to dotted class paths.
        """
        self._name = name
        self._modules = {}
        self._default_mapping = default_mapping
        self.logger = get_logger(__name__)

    @property
    def name(self) -> str:
        return self._name

    @property
    def modules(self) -> dict:
        """Classes registered so far, including lazily imported defaults."""
        return self._modules

    def keys(self) -> list:
        return sorted(set(self._default_mapping) | set(self._modules))

    def get(self, module_key) -> Any:
        """
        Get the class registered under `module_key`. Keys from the default
        mapping are imported on first use; a dotted path that is not registered
        is imported and registered under that path.

        Args:
            module_key (`str`): registered name or dotted class path

        Returns:
            `Any`: the class, or None for an empty key
        """
        if module_key is None:
            self.logger.info(f"Empty key for registry {self._name}, return None")
            return None
        module = self._modules.get(module_key, None)
        if module is not None:
            return module

        if module_key in self._default_mapping:
            dotted_path = self._default_mapping[module_key]
        elif isinstance(module_key, str) and "." in module_key:
            dotted_path = module_key
        else:
            raise ValueError(f"Unknown key `{module_key}` for registry {self._name}")

        module_path, class_name = dotted_path.rsplit(".", 1)
        try:
            module = getattr(importlib.import_module(module_path), class_name)
        except Exception:
            self.logger.error(
                f"Failed to dynamically import {class_name} from {module_path}:\n"
                + traceback.format_exc()
            )
            raise ImportError(f"Cannot dynamically import {class_name} from {module_path}")
        self._register_module(module_name=module_key, module_cls=module)
        return module

    def _register_module(self, module_name=None, module_cls=None, force=False):
        if module_name is None:
            module_name = module_cls.__name__

        if module_name in self._modules and not force:
            self.logger.warning(
                f"{module_name} is already registered in {self._name}, "
                f"if you want to override it, please set force=True."
            )
            raise KeyError(f"{module_name} is already registered in {self._name}")

        self._modules[module_name] = module_cls
        module_cls._name = module_name

    def register_module(self, module_name: str, module_cls: Type = None, force=False):
        """
        Register a class under `module_name`, directly or as a decorator.

        Example:

            .. code-block:: python

                @REMOVAL_POLICIES.register_module("strict")
                class StrictRemoval(RemovalPolicyFn):
                    ...
        """
        if not (module_name is None or isinstance(module_name, str)):
            raise TypeError(f"module_name must be either of None, str, got {type(module_name)}")
        if module_cls is not None:
            self._register_module(module_name=module_name, module_cls=module_cls, force=force)
            return module_cls

        def _register(module_cls):
            self._register_module(module_name=module_name, module_cls=module_cls, force=force)
            return module_cls

        return _register
