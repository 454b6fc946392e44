# -*- coding: utf-8 -*-
"""Test cases for the registry."""
import unittest

from sudoku.engine.history import HistoryTree
from sudoku.engine.removal import REMOVAL_POLICIES, RemovalPolicyFn
from sudoku.utils.registry import Registry


class DummyPolicy(RemovalPolicyFn):
    def accept(self, board, row, col):
        return False


class TestRegistry(unittest.TestCase):
    def test_default_mapping_is_lazy(self):
        registry = Registry(
            "dummy", default_mapping={"unique": "sudoku.engine.removal.UniqueRemoval"}
        )
        self.assertEqual(registry.name, "dummy")
        self.assertEqual(registry.keys(), ["unique"])
        self.assertEqual(registry.modules, {})

        policy_cls = registry.get("unique")
        self.assertTrue(issubclass(policy_cls, RemovalPolicyFn))
        self.assertIs(registry.modules["unique"], policy_cls)
        self.assertIs(registry.get("unique"), policy_cls)

    def test_removal_policy_mapping(self):
        for name in REMOVAL_POLICIES.keys():
            with self.subTest(name=name):
                policy_cls = REMOVAL_POLICIES.get(name)
                self.assertIsNotNone(policy_cls, f"{name} should be retrievable from registry")
                self.assertTrue(
                    issubclass(policy_cls, RemovalPolicyFn),
                    f"{name} should be a subclass of RemovalPolicyFn",
                )
                self.assertEqual(policy_cls._name, name)

    def test_unknown_keys(self):
        registry = Registry("dummy")
        self.assertIsNone(registry.get(None))
        with self.assertRaises(ValueError):
            registry.get("non_existent_policy")
        with self.assertRaises(ImportError):
            registry.get("sudoku.engine.removal.NoSuchPolicy")

    def test_dotted_path_is_registered(self):
        registry = Registry("dummy")
        tree_cls = registry.get("sudoku.engine.history.HistoryTree")
        self.assertIs(tree_cls, HistoryTree)
        self.assertIn("sudoku.engine.history.HistoryTree", registry.keys())

    def test_register_module(self):
        registry = Registry("dummy")

        @registry.register_module("never")
        class NeverRemoval(RemovalPolicyFn):
            def accept(self, board, row, col):
                return False

        self.assertIs(registry.get("never"), NeverRemoval)
        self.assertEqual(NeverRemoval._name, "never")
        self.assertFalse(registry.get("never")(generator=None).accept([[0]], 0, 0))

        with self.assertRaises(KeyError):
            registry.register_module("never", NeverRemoval)
        registry.register_module("never", DummyPolicy, force=True)
        self.assertIs(registry.get("never"), DummyPolicy)

        with self.assertRaises(TypeError):
            registry.register_module(3)
