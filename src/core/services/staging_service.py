from __future__ import annotations

import logging
from collections.abc import Iterator
from decimal import ROUND_HALF_UP, Decimal

from core.dtos import PartDTO, StagedEntry
from core.services.catalog_service import default_optional

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class StagingList:
    """
    Working set of parts for a kit draft, keyed by ``part_id``.

    Holds at most one entry per part; staging an already-staged part bumps
    its quantity. Mutations that name an unknown part are no-ops.
    """

    def __init__(self) -> None:
        self._entries: dict[int, StagedEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StagedEntry]:
        return iter(list(self._entries.values()))

    def __contains__(self, part_id: object) -> bool:
        return part_id in self._entries

    @property
    def entries(self) -> list[StagedEntry]:
        return list(self._entries.values())

    def get(self, part_id: int) -> StagedEntry | None:
        return self._entries.get(part_id)

    def add_part(self, part: PartDTO) -> StagedEntry:
        entry = self._entries.get(part.part_id)
        if entry is not None:
            entry.quantity += 1
            return entry
        entry = StagedEntry(part=part, quantity=1, is_optional=default_optional(part), notes="")
        self._entries[part.part_id] = entry
        return entry

    def remove_part(self, part_id: int) -> None:
        self._entries.pop(part_id, None)

    def set_quantity(self, part_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove_part(part_id)
            return
        entry = self._lookup(part_id, "set_quantity")
        if entry is not None:
            entry.quantity = quantity

    def set_optional(self, part_id: int, is_optional: bool) -> None:
        entry = self._lookup(part_id, "set_optional")
        if entry is not None:
            entry.is_optional = is_optional

    def toggle_optional(self, part_id: int) -> None:
        entry = self._lookup(part_id, "toggle_optional")
        if entry is not None:
            entry.is_optional = not entry.is_optional

    def set_notes(self, part_id: int, notes: str) -> None:
        entry = self._lookup(part_id, "set_notes")
        if entry is not None:
            entry.notes = notes

    def clear(self) -> None:
        self._entries.clear()

    # --- Derived totals ---
    @property
    def total_units(self) -> int:
        return sum(e.quantity for e in self._entries.values())

    @property
    def total_cost(self) -> Decimal:
        total = sum(
            (Decimal(str(e.part.unit_cost or 0)) * e.quantity for e in self._entries.values()),
            Decimal("0"),
        )
        return total.quantize(CENT, rounding=ROUND_HALF_UP)

    def _lookup(self, part_id: int, action: str) -> StagedEntry | None:
        entry = self._entries.get(part_id)
        if entry is None:
            logger.debug("%s ignored: part %s is not staged", action, part_id)
        return entry
