from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from infra.api.client import ApiClient


class BaseRepo:
    def __init__(self, client: ApiClient):
        self.client = client

    def _get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        return self.client.get_json(endpoint, params=dict(params or {}))

    def _post(self, endpoint: str, payload: Mapping[str, Any]) -> dict:
        data = self.client.post_json(endpoint, dict(payload))
        return data if isinstance(data, dict) else {}
