"""JSON reading and writing without recursion.

A saved game nests two levels per history node, so a long single-branch game
is deeper than the stdlib encoder and decoder can follow. Containers are
handled here with explicit stacks; strings, numbers and literals are still
encoded and decoded by the `json` module.
"""
import json
import re
from json.decoder import JSONDecodeError, scanstring
from typing import IO, Any, Iterator, List

_END = object()
_WHITESPACE = re.compile(r"[ \t\n\r]*")
_SCALAR_DECODER = json.JSONDecoder()


def iterencode(obj: Any) -> Iterator[str]:
    """Yield the JSON text of `obj` in chunks."""
    # frames are [closing bracket, item iterator, is dict, first item pending]
    stack: List[list] = []
    value = obj
    while True:
        if isinstance(value, dict):
            if value:
                yield "{"
                stack.append(["}", iter(value.items()), True, True])
            else:
                yield "{}"
        elif isinstance(value, (list, tuple)):
            if value:
                yield "["
                stack.append(["]", iter(value), False, True])
            else:
                yield "[]"
        else:
            yield json.dumps(value)

        while stack:
            frame = stack[-1]
            item = next(frame[1], _END)
            if item is _END:
                stack.pop()
                yield frame[0]
                continue
            if not frame[3]:
                yield ", "
            frame[3] = False
            if frame[2]:
                key, value = item
                if not isinstance(key, str):
                    raise TypeError(f"keys must be str, not {type(key).__name__}")
                yield json.dumps(key) + ": "
            else:
                value = item
            break
        else:
            return


def dumps(obj: Any) -> str:
    return "".join(iterencode(obj))


def dump(obj: Any, f: IO[str]) -> None:
    for chunk in iterencode(obj):
        f.write(chunk)


def _skip(text: str, idx: int) -> int:
    return _WHITESPACE.match(text, idx).end()


def _read_key(text: str, idx: int, keys: List[str]) -> int:
    if text[idx : idx + 1] != '"':
        raise JSONDecodeError("Expecting property name enclosed in double quotes", text, idx)
    key, idx = scanstring(text, idx + 1)
    idx = _skip(text, idx)
    if text[idx : idx + 1] != ":":
        raise JSONDecodeError("Expecting ':' delimiter", text, idx)
    keys.append(key)
    return _skip(text, idx + 1)


def loads(text: str) -> Any:
    """
    Parse a JSON document of any nesting depth.

    Raises:
        `json.JSONDecodeError`: for malformed text.
    """
    stack: List[Any] = []
    keys: List[str] = []
    idx = _skip(text, 0)
    while True:
        ch = text[idx : idx + 1]
        if ch == "{":
            idx = _skip(text, idx + 1)
            if text[idx : idx + 1] == "}":
                value, idx = {}, idx + 1
            else:
                stack.append({})
                idx = _read_key(text, idx, keys)
                continue
        elif ch == "[":
            idx = _skip(text, idx + 1)
            if text[idx : idx + 1] == "]":
                value, idx = [], idx + 1
            else:
                stack.append([])
                continue
        else:
            value, idx = _SCALAR_DECODER.raw_decode(text, idx)

        # attach the finished value and close every container it completes
        while True:
            if not stack:
                idx = _skip(text, idx)
                if idx != len(text):
                    raise JSONDecodeError("Extra data", text, idx)
                return value
            parent = stack[-1]
            if isinstance(parent, dict):
                parent[keys.pop()] = value
            else:
                parent.append(value)
            idx = _skip(text, idx)
            ch = text[idx : idx + 1]
            if ch == ",":
                idx = _skip(text, idx + 1)
                if isinstance(parent, dict):
                    idx = _read_key(text, idx, keys)
                break
            if ch == ("}" if isinstance(parent, dict) else "]"):
                idx += 1
                value = stack.pop()
                continue
            raise JSONDecodeError("Expecting ',' delimiter", text, idx)


def load(f: IO[str]) -> Any:
    return loads(f.read())
