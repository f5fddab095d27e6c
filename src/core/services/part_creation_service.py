from __future__ import annotations

import logging
from typing import Protocol

from core.dtos import ENGLISH, PartDraft, PartDTO
from core.errors import RequestError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = (
    "Please fill in all required fields (Part Number, Category, and English Name)"
)
CREATE_FAILED_MESSAGE = "Failed to create new part"
CREATED_MESSAGE = "New part created and added to your set!"


class PartsWriteRepo(Protocol):
    def create(self, *, draft: PartDraft) -> PartDTO: ...


def validate_part_draft(draft: PartDraft) -> None:
    english = draft.translation(ENGLISH)
    missing = [
        name
        for name, value in (
            ("part_number", draft.part_number),
            ("category", draft.category),
            ("part_name", english.part_name if english else ""),
        )
        if not value.strip()
    ]
    if missing:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE, field=missing[0])


def describe_part_failure(error: RequestError) -> str:
    return error.backend_message or CREATE_FAILED_MESSAGE


class PartCreationService:
    """Validates an inline part definition and creates it on the backend."""

    def __init__(self, parts: PartsWriteRepo) -> None:
        self._parts = parts

    def create_part(self, draft: PartDraft) -> PartDTO:
        validate_part_draft(draft)
        part = self._parts.create(draft=draft)
        logger.info("Created part %s (%s)", part.part_id, part.part_number)
        return part
