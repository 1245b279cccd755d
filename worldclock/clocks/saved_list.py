"""The user's ordered list of tracked zone ids."""
from __future__ import annotations

import json
from typing import Iterable, Iterator


class SavedZoneList:
    """Insertion-ordered, duplicate-free list of zone ids.

    Ids are not validated here; callers add ids taken from the catalog.
    """

    def __init__(self, zone_ids: Iterable[str] = ()) -> None:
        self._zone_ids: list[str] = list(dict.fromkeys(zone_ids))

    def add(self, zone_id: str) -> bool:
        if zone_id in self._zone_ids:
            return False
        self._zone_ids.append(zone_id)
        return True

    def remove(self, zone_id: str) -> bool:
        if zone_id not in self._zone_ids:
            return False
        self._zone_ids.remove(zone_id)
        return True

    def as_list(self) -> list[str]:
        return list(self._zone_ids)

    def to_json(self) -> str:
        return json.dumps(self._zone_ids)

    @classmethod
    def from_json(cls, raw: str) -> "SavedZoneList":
        """Parse a stored JSON array of ids; raise ``ValueError`` on anything else."""
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Saved zones are not valid JSON: {exc}") from exc
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValueError("Saved zones must be a JSON array of strings")
        return cls(value)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._zone_ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._zone_ids))

    def __len__(self) -> int:
        return len(self._zone_ids)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SavedZoneList):
            return self._zone_ids == other._zone_ids
        return NotImplemented

    def __repr__(self) -> str:
        return f"SavedZoneList({self._zone_ids!r})"
