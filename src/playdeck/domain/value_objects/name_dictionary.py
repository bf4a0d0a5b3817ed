"""Identifier to display-name lookup, built from the same listing as a TokenIndex."""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType


class NameDictionary(Mapping[str, str]):
    """Read-only id -> name mapping.

    Duplicate ids in the source listing are not expected, the last one wins.
    `lookup()` returns "" for unknown ids since the value is only ever displayed.
    """

    def __init__(self, names: Iterable[tuple[str, str]] = ()) -> None:
        built: dict[str, str] = {}
        for name, entity_id in names:
            built[entity_id] = name
        self._names = MappingProxyType(built)

    def lookup(self, entity_id: str) -> str:
        return self._names.get(entity_id, "")

    def __getitem__(self, entity_id: str) -> str:
        return self._names[entity_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)
