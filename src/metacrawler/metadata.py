"""Metadata items and the first-writer-wins collector."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class MetadataItem:
    """A single name/value pair extracted from a response."""

    name: str
    value: str

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise TypeError(f"name must be a str, got {type(self.name).__name__}")
        if not isinstance(self.value, str):
            raise TypeError(f"value must be a str, got {type(self.value).__name__}")


class MetadataCollector:
    """
    Ordered, append-only collection keyed by item name.

    The first item seen for a name is kept; later items with the same name
    are discarded.
    """

    def __init__(self):
        self._items: dict[str, MetadataItem] = {}

    def add(self, item: MetadataItem) -> bool:
        """Add item unless its name is already taken. Returns True if kept."""
        if item.name in self._items:
            return False
        self._items[item.name] = item
        return True

    def extend(self, items: Iterable[MetadataItem] | None) -> int:
        """Add every item; None counts as empty. Returns how many were kept."""
        if items is None:
            return 0
        return sum(1 for item in items if self.add(item))

    def items(self) -> list[MetadataItem]:
        return list(self._items.values())

    def as_dict(self) -> dict[str, str]:
        return {name: item.value for name, item in self._items.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __iter__(self) -> Iterator[MetadataItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
