from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .base import BaseRepo

logger = logging.getLogger(__name__)


class PartsRepo(BaseRepo):
    def list_parts(
        self,
        *,
        language: str | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        rows, _ = self.list_parts_page(language=language, category=category, limit=limit)
        return rows

    def list_parts_page(
        self,
        *,
        language: str | None = None,
        category: str | None = None,
        limit: int | None = None,
    ) -> tuple[list[dict], dict | None]:
        """
        Return raw part rows from ``GET /parts`` plus the ``pagination`` block, if any.
        Accepts the paginated ``{"parts": [...]}`` envelope, a ``{"data": [...]}``
        wrapper, or a bare list. Rows that are not JSON objects are dropped.
        """
        params: dict[str, Any] = {}
        if language:
            params["language"] = language
        if category:
            params["category"] = category
        if limit:
            params["limit"] = limit
        data = self._get("/parts", params)

        rows: list = []
        pagination = None
        if isinstance(data, list):
            rows = data
        elif isinstance(data, dict):
            for key in ("parts", "data"):
                if isinstance(data.get(key), list):
                    rows = data[key]
                    break
            if isinstance(data.get("pagination"), Mapping):
                pagination = dict(data["pagination"])

        parts = [row for row in rows if isinstance(row, Mapping)]
        if len(parts) != len(rows):
            logger.warning("Dropped %d malformed part rows", len(rows) - len(parts))
        return parts, pagination

    def create_part(self, payload: Mapping[str, Any]) -> dict:
        return self._post("/parts", payload)
