from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from core.dtos import PartDTO
from core.enums import SortKey, SortOrder
from core.errors import FetchError, RequestError

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load parts"


class PartsCatalogRepo(Protocol):
    def list(self) -> Iterable[PartDTO]: ...


class CatalogService:
    """
    Loads the parts catalog. Callers keep whatever they loaded last when
    this raises; the service itself holds no cache.
    """

    def __init__(self, parts: PartsCatalogRepo) -> None:
        self._parts = parts

    def load_catalog(self) -> list[PartDTO]:
        try:
            parts = list(self._parts.list())
        except RequestError as exc:
            raise FetchError(
                LOAD_FAILED_MESSAGE,
                status_code=exc.status_code,
                backend_message=exc.backend_message,
            ) from exc
        except (TypeError, ValueError) as exc:
            # includes pydantic.ValidationError
            raise FetchError(f"{LOAD_FAILED_MESSAGE}: malformed part data") from exc
        logger.debug("Loaded %d parts", len(parts))
        return parts


def _text(value: str | None) -> str:
    return (value or "").lower()


def matches(part: PartDTO, query: str) -> bool:
    """True if any searchable field contains *query* (case-insensitive)."""
    needle = query.lower()
    return any(
        needle in _text(field)
        for field in (
            part.part_name,
            part.part_number,
            part.category,
            part.description,
            part.supplier,
        )
    )


def _sort_value(part: PartDTO, key: SortKey):
    if key is SortKey.NUMBER:
        return _text(part.part_number)
    if key is SortKey.CATEGORY:
        return _text(part.category)
    if key is SortKey.COST:
        return part.unit_cost or 0
    if key is SortKey.STOCK:
        return part.stock_quantity or 0
    return _text(part.part_name)


def derive_view(
    catalog: Sequence[PartDTO],
    query: str = "",
    sort_key: SortKey | str = SortKey.NAME,
    order: SortOrder | str = SortOrder.ASC,
) -> list[PartDTO]:
    """Filter *catalog* by *query* and sort it; the input is left untouched."""
    key = SortKey.from_any(sort_key)
    descending = SortOrder.from_any(order) is SortOrder.DESC

    parts: Iterable[PartDTO] = catalog
    if query.strip():
        parts = (p for p in catalog if matches(p, query))

    return sorted(parts, key=lambda p: _sort_value(p, key), reverse=descending)


def default_optional(part: PartDTO) -> bool:
    # Tools ship as optional extras; everything else is required.
    return part.is_tool
