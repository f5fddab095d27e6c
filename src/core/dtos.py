from pydantic import BaseModel, ConfigDict, Field

from core.enums import Difficulty, StockLevel

SUPPORTED_LANGUAGES = ("en", "et", "ru", "fi")
ENGLISH = "en"
TOOL_CATEGORY = "tool"


class DTOBase(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        alias_generator=lambda s: "".join(
            ["_" + c.lower() if c.isupper() else c for c in s]
        ).lstrip("_"),
        str_strip_whitespace=True,
        strict=True,
    )


class WireDTO(DTOBase):
    """Base for payloads that come off the wire or out of a form; values coerce."""

    model_config = ConfigDict(strict=False)


class PartTranslation(WireDTO):
    language_code: str = ""
    part_name: str = ""
    description: str | None = None


class PartDTO(WireDTO):
    part_id: int
    part_number: str = ""
    part_name: str = ""
    category: str = ""
    unit_of_measure: str = ""
    unit_cost: float | None = None
    stock_quantity: int = 0
    minimum_stock_level: int = 0
    description: str | None = None
    supplier: str | None = None
    supplier_part_number: str | None = None
    image_url: str | None = None
    translations: dict[str, PartTranslation] | None = None

    @property
    def is_tool(self) -> bool:
        return self.category == TOOL_CATEGORY

    @property
    def stock_level(self) -> StockLevel:
        return StockLevel.for_stock(self.stock_quantity, self.minimum_stock_level)


def blank_part_translations() -> list[PartTranslation]:
    return [PartTranslation(language_code=code) for code in SUPPORTED_LANGUAGES]


class PartDraft(WireDTO):
    part_number: str = ""
    category: str = ""
    unit_of_measure: str = ""
    unit_cost: float = 0
    supplier: str = ""
    supplier_part_number: str = ""
    stock_quantity: int = 0
    minimum_stock_level: int = 1
    image_url: str = ""
    assembly_notes: str = ""
    safety_notes: str = ""
    translations: list[PartTranslation] = Field(default_factory=blank_part_translations)

    def translation(self, language_code: str) -> PartTranslation | None:
        for t in self.translations:
            if t.language_code == language_code:
                return t
        return None


class StagedEntry(DTOBase):
    part: PartDTO
    quantity: int = Field(default=1, ge=1)
    is_optional: bool = False
    notes: str = ""

    @property
    def part_id(self) -> int:
        return self.part.part_id


class SetTranslation(WireDTO):
    language_code: str
    name: str = ""
    description: str = ""


def blank_set_translations() -> dict[str, SetTranslation]:
    return {code: SetTranslation(language_code=code) for code in SUPPORTED_LANGUAGES}


class SetDraft(WireDTO):
    model_config = ConfigDict(validate_assignment=True)

    category: str = ""
    difficulty: Difficulty | None = None
    age_min: int = 0
    age_max: int = 0
    duration_minutes: int = 0
    translations: dict[str, SetTranslation] = Field(default_factory=blank_set_translations)

    @property
    def english(self) -> SetTranslation:
        return self.translations.get(ENGLISH) or SetTranslation(language_code=ENGLISH)


class CreatedSetDTO(WireDTO):
    set_id: int
    message: str | None = None


class PageMeta(WireDTO):
    page: int = 1
    limit: int = 0
    total: int = 0
    pages: int = 1

    @property
    def truncated(self) -> bool:
        return self.page < self.pages
