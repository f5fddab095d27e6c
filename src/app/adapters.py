from collections.abc import Callable, Iterable, Mapping

from core.dtos import ENGLISH, CreatedSetDTO, PageMeta, PartDraft, PartDTO, PartTranslation
from core.errors import RequestError


def _translations(raw) -> dict[str, PartTranslation] | None:
    # Backend sends either {"en": {...}} or [{"language_code": "en", ...}]
    if isinstance(raw, Mapping):
        return {
            code: PartTranslation.model_validate({**(t or {}), "language_code": code})
            for code, t in raw.items()
        }
    if isinstance(raw, list):
        return {
            t["language_code"]: PartTranslation.model_validate(t)
            for t in raw
            if isinstance(t, Mapping) and t.get("language_code")
        }
    return None


def row_to_part(row: Mapping) -> PartDTO:
    translations = _translations(row.get("translations"))
    english = (translations or {}).get(ENGLISH)
    return PartDTO(
        part_id=int(row.get("part_id") or row.get("id") or 0),
        part_number=str(row.get("part_number") or ""),
        part_name=str(row.get("part_name") or row.get("name") or (english.part_name if english else "")),
        category=str(row.get("category") or ""),
        unit_of_measure=str(row.get("unit_of_measure") or ""),
        unit_cost=row.get("unit_cost"),
        stock_quantity=int(row.get("stock_quantity") or 0),
        minimum_stock_level=int(row.get("minimum_stock_level") or 0),
        description=row.get("description") or (english.description if english else None),
        supplier=row.get("supplier"),
        supplier_part_number=row.get("supplier_part_number"),
        image_url=row.get("image_url"),
        translations=translations,
    )


def row_to_created_part(row: Mapping, draft: PartDraft) -> PartDTO:
    """Build the created part from the backend's answer, filling gaps from the draft.

    The backend acknowledges with ``{message, part_id}`` only, so anything it
    leaves out comes from what the operator typed.
    """
    if row.get("part_number"):
        return row_to_part(row)
    data = draft.model_dump()
    data["part_id"] = row.get("part_id") or row.get("id")
    return row_to_part(data)


def row_to_created_set(row: Mapping) -> CreatedSetDTO:
    set_id = row.get("set_id") or row.get("id")
    if not set_id:
        # 201 Created without an identifier
        raise RequestError("Invalid response: no set id returned", status_code=201)
    return CreatedSetDTO(set_id=int(set_id), message=row.get("message"))


def row_to_page_meta(row: Mapping | None) -> PageMeta | None:
    if not row:
        return None
    return PageMeta.model_validate(row)


def rows_to(dto_fn: Callable[[Mapping], object], rows: Iterable[Mapping]) -> list[object]:
    return [dto_fn(row) for row in rows]
