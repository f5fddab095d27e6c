from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import BaseRepo


class SetsRepo(BaseRepo):
    def create_set(self, payload: Mapping[str, Any]) -> dict:
        """POST a set with its parts; the backend answers ``{message, set_id}``."""
        return self._post("/sets", payload)
