"""Ordered string map with duplicate keys, used for query strings and request bodies."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, List, Optional, Tuple

import orjson
from pydantic import BaseModel

Pair = Tuple[str, Optional[str]]


def stringify(value: Any) -> Optional[str]:
    """Convert a property value to the string stored in a StrLst."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list, tuple)):
        return orjson.dumps(value).decode('utf-8')
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return str(value)


class StrLst:
    """Insertion ordered list of string key/value pairs. Keys may repeat."""

    def __init__(self, pairs: Optional[Iterable[Tuple[Any, Any]]] = None):
        self._pairs: List[Pair] = []
        if pairs is not None:
            self.append(pairs)

    def add(self, key: str, value: Any) -> 'StrLst':
        if not isinstance(key, str):
            raise TypeError(f'StrLst keys must be strings, got {type(key).__name__}')
        self._pairs.append((key, stringify(value)))
        return self

    def append(self, other: StrLst | Mapping[str, Any] | Iterable[Tuple[Any, Any]]) -> 'StrLst':
        """Merge another StrLst, mapping or iterable of pairs at the end of this one."""
        if isinstance(other, StrLst):
            self._pairs.extend(other._pairs)
            return self
        items = other.items() if isinstance(other, Mapping) else other
        for key, value in items:
            self.add(key, value)
        return self

    def clear(self) -> None:
        self._pairs.clear()

    def clone(self) -> 'StrLst':
        copy = StrLst()
        copy._pairs = list(self._pairs)
        return copy

    def keys(self) -> List[str]:
        return [k for k, _ in self._pairs]

    def values(self) -> List[Optional[str]]:
        return [v for _, v in self._pairs]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for k, v in self._pairs:
            if k == key:
                return v
        return default

    def get_all(self, key: str) -> List[Optional[str]]:
        return [v for k, v in self._pairs if k == key]

    def to_pairs(self) -> List[Tuple[str, str]]:
        """Pairs with missing values rendered as empty strings, ready for url encoding."""
        return [(k, '' if v is None else v) for k, v in self._pairs]

    def to_dict(self) -> dict:
        # A JSON object cannot repeat keys; the last occurrence wins.
        return {k: v for k, v in self._pairs}

    def to_json(self, indent: bool = False) -> str:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(), option=option).decode('utf-8')

    @classmethod
    def from_json(cls, text: str | bytes) -> 'StrLst':
        data = orjson.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f'Expected a JSON object, got {type(data).__name__}')
        return cls(data.items())

    @classmethod
    def from_object(cls, obj: Any) -> 'StrLst':
        """Build a StrLst from an object that knows how to expose its properties.

        Supported sources, checked in order:
        - a StrLst (returned as an independent clone)
        - any Mapping
        - a pydantic model, in declared field order
        - a dataclass instance, in declared field order
        - an object with a ``to_pairs()`` method
        - an iterable of (key, value) tuples
        """
        if isinstance(obj, StrLst):
            return obj.clone()
        if isinstance(obj, Mapping):
            return cls(obj.items())
        if isinstance(obj, BaseModel):
            return cls(obj.model_dump(mode='json').items())
        if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return cls((f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj))
        to_pairs = getattr(obj, 'to_pairs', None)
        if callable(to_pairs):
            return cls(to_pairs())
        if isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, bytearray)):
            return cls(obj)
        raise TypeError(f'Cannot convert {type(obj).__name__} to StrLst: provide a mapping, pydantic model, dataclass or to_pairs()')

    def __len__(self) -> int:
        return len(self._pairs)

    def __bool__(self) -> bool:
        return bool(self._pairs)

    def __iter__(self) -> Iterator[Pair]:
        return iter(list(self._pairs))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StrLst):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f'StrLst({self._pairs!r})'
