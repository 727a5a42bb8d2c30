"""Dotted value paths applied to decoded JSON responses."""

from dataclasses import dataclass
from functools import reduce
from typing import Self

from pydantic import JsonValue

from httpchain_pool.exceptions import KeyNotFoundError


@dataclass(frozen=True, slots=True)
class Key:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Index:
    position: int

    def __str__(self) -> str:
        return str(self.position)


Selector = Key | Index


def parse_selector(segment: str) -> Selector:
    """Turn one dotted-path segment into a selector.

    Segments made only of ASCII digits are always array indices.
    """
    if segment.isascii() and segment.isdigit():
        return Index(int(segment))
    return Key(segment)


@dataclass(frozen=True, slots=True)
class ValuePath:
    """Ordered object-key/array-index selectors; empty means identity."""

    selectors: tuple[Selector, ...] = ()

    @classmethod
    def parse(cls, path: str) -> Self:
        """Parse a dotted path such as ``"data.items.0.id"``.

        Args:
            path: Dotted path string, empty string for identity

        Returns:
            The parsed value path
        """
        if path == "":
            return cls()
        return cls(tuple(parse_selector(segment) for segment in path.split(".")))

    def apply(self, root: JsonValue) -> JsonValue:
        """Fold the selectors over a JSON value.

        Args:
            root: Decoded JSON document

        Returns:
            The selected sub-value

        Raises:
            KeyNotFoundError: On the first selector without a match
        """
        return reduce(self._select, self.selectors, root)

    def _select(self, value: JsonValue, selector: Selector) -> JsonValue:
        match selector, value:
            case Key(name=name), dict() if name in value:
                return value[name]
            case Index(position=position), list() if position < len(value):
                return value[position]
            case _:
                raise KeyNotFoundError(selector, self)

    def __str__(self) -> str:
        return ".".join(str(selector) for selector in self.selectors)
