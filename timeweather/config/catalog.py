"""City catalog: static lookup from city key to its entry."""

from collections.abc import Iterable, Iterator

from timeweather.config.schema import CityEntry


class CityCatalog:
    def __init__(self, entries: Iterable[CityEntry]):
        self._entries: dict[str, CityEntry] = {}
        for entry in entries:
            if entry.key in self._entries:
                raise ValueError(f"Duplicate city key: {entry.key}")
            self._entries[entry.key] = entry

    def lookup(self, key: str | None) -> CityEntry | None:
        if key is None:
            return None
        return self._entries.get(key)

    def require(self, key: str) -> CityEntry:
        """Like lookup(), but raises KeyError for unknown keys."""
        entry = self.lookup(key)
        if entry is None:
            raise KeyError(f"Unknown city key: {key}")
        return entry

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[CityEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
