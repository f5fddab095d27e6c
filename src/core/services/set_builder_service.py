from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from core.dtos import CreatedSetDTO, SetDraft, StagedEntry
from core.errors import RequestError, ValidationError

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "Failed to create set"
INVALID_DATA_MESSAGE = f"{FAILURE_PREFIX}: Invalid data provided. Please check all required fields."
DUPLICATE_NAME_MESSAGE = f"{FAILURE_PREFIX}: A set with this name already exists."
SERVER_ERROR_MESSAGE = f"{FAILURE_PREFIX}: Server error. Please try again later."
NETWORK_ERROR_MESSAGE = (
    f"{FAILURE_PREFIX}: Network error. Please check your connection and try again."
)
NO_PARTS_MESSAGE = "Please select at least one part before creating a set"


class SetsRepo(Protocol):
    def create(self, *, payload: Mapping[str, Any]) -> CreatedSetDTO: ...


def validate_set(draft: SetDraft, entries: Sequence[StagedEntry]) -> None:
    """Raise ``ValidationError`` for the first rule the draft breaks."""
    if not entries:
        raise ValidationError(NO_PARTS_MESSAGE, field="parts")
    if not draft.category.strip():
        raise ValidationError("Category is required", field="category")
    if draft.difficulty is None:
        raise ValidationError("Difficulty level is required", field="difficulty")
    if not draft.english.name.strip():
        raise ValidationError("English name is required", field="name")
    for field, value in (
        ("age_min", draft.age_min),
        ("age_max", draft.age_max),
        ("duration_minutes", draft.duration_minutes),
    ):
        if value < 0:
            raise ValidationError(f"{field} cannot be negative", field=field)
    # 0 means "not specified" for the upper bound
    if draft.age_max and draft.age_min > draft.age_max:
        raise ValidationError(
            "Minimum age cannot be greater than maximum age", field="age_min"
        )


def build_payload(draft: SetDraft, entries: Sequence[StagedEntry]) -> dict[str, Any]:
    english = draft.english
    return {
        "category": draft.category.strip(),
        "difficulty_level": draft.difficulty.value if draft.difficulty else "",
        "recommended_age_min": draft.age_min,
        "recommended_age_max": draft.age_max,
        "estimated_duration_minutes": draft.duration_minutes,
        "name": english.name,
        "description": english.description,
        "translations": [t.model_dump() for t in draft.translations.values()],
        "parts": [
            {
                "part_id": e.part_id,
                "quantity": e.quantity,
                "is_optional": e.is_optional,
                "notes": e.notes,
            }
            for e in entries
        ],
    }


def describe_failure(error: RequestError) -> str:
    """Pick the operator-facing message for a failed set creation."""
    if error.backend_message:
        return f"{FAILURE_PREFIX}: {error.backend_message}"
    if error.status_code == 400:
        return INVALID_DATA_MESSAGE
    if error.status_code == 409:
        return DUPLICATE_NAME_MESSAGE
    if error.status_code == 500:
        return SERVER_ERROR_MESSAGE
    if error.is_network_error:
        return NETWORK_ERROR_MESSAGE
    return f"{FAILURE_PREFIX}: {error.message or 'Unknown error occurred'}"


class SetBuilderService:
    """
    Validates a kit draft with its staged parts and creates it on the backend.
    """

    def __init__(self, sets: SetsRepo) -> None:
        self._sets = sets

    def submit(self, draft: SetDraft, entries: Sequence[StagedEntry]) -> int:
        validate_set(draft, entries)
        payload = build_payload(draft, entries)
        created = self._sets.create(payload=payload)
        logger.info(
            "Created set %s %r with %d part lines",
            created.set_id,
            payload["name"],
            len(payload["parts"]),
        )
        return created.set_id
