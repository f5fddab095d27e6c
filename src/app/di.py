from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import requests

from app.adapters import (
    row_to_created_part,
    row_to_created_set,
    row_to_page_meta,
    row_to_part,
    rows_to,
)
from app.log import configure_logging
from app.settings import Settings, get_settings
from core.dtos import CreatedSetDTO, PartDraft, PartDTO
from core.services.catalog_service import CatalogService
from core.services.part_creation_service import PartCreationService
from core.services.set_builder_service import SetBuilderService
from core.services.timers import Scheduler
from core.services.workbench import SetWorkbench
from infra.api.client import ApiClient

# Concrete repos (HTTP implementations)
from infra.api.repositories.parts_repo import PartsRepo as PartsRepoImpl
from infra.api.repositories.sets_repo import SetsRepo as SetsRepoImpl
from infra.timers import ThreadingScheduler

logger = logging.getLogger(__name__)

# -----------------------------
# Client helper
# -----------------------------


def build_client(settings: Settings, *, session: requests.Session | None = None) -> ApiClient:
    """Create the backend client from explicit settings (no ambient token lookup)."""
    return ApiClient(
        settings.api_base_url,
        token=settings.token(),
        timeout=settings.request_timeout,
        session=session,
    )


# -----------------------------
# Adapters to satisfy Protocols
# -----------------------------


class _PartsCatalogAdapter:
    """
    Adapts PartsRepoImpl to the PartsCatalogRepo Protocol expected by CatalogService.
    Protocol: list() -> Iterable[PartDTO]
    """

    def __init__(self, impl: PartsRepoImpl, *, language: str | None, limit: int | None) -> None:
        self._impl = impl
        self._language = language
        self._limit = limit

    def list(self):
        rows, pagination = self._impl.list_parts_page(language=self._language, limit=self._limit)
        page = row_to_page_meta(pagination)
        if page is not None and page.truncated:
            logger.warning(
                "Catalog truncated: loaded %d of %d parts (limit=%d)",
                len(rows),
                page.total,
                page.limit,
            )
        return rows_to(row_to_part, rows)


class _PartsWriteAdapter:
    """
    Adapts PartsRepoImpl to the PartsWriteRepo Protocol expected by PartCreationService.
    Protocol: create(draft=...) -> PartDTO
    """

    def __init__(self, impl: PartsRepoImpl) -> None:
        self._impl = impl

    def create(self, *, draft: PartDraft) -> PartDTO:
        row = self._impl.create_part(draft.model_dump())
        return row_to_created_part(row, draft)


class _SetsRepoAdapter:
    """
    Adapts SetsRepoImpl to the SetsRepo Protocol expected by SetBuilderService.
    Protocol: create(payload=...) -> CreatedSetDTO
    """

    def __init__(self, impl: SetsRepoImpl) -> None:
        self._impl = impl

    def create(self, *, payload: Mapping[str, Any]) -> CreatedSetDTO:
        return row_to_created_set(self._impl.create_set(payload))


# -----------------------------
# Factories
# -----------------------------


def get_catalog_service(client: ApiClient, settings: Settings) -> CatalogService:
    parts = _PartsCatalogAdapter(
        PartsRepoImpl(client), language=settings.language, limit=settings.catalog_limit
    )
    return CatalogService(parts=parts)


def get_part_creation_service(client: ApiClient) -> PartCreationService:
    return PartCreationService(parts=_PartsWriteAdapter(PartsRepoImpl(client)))


def get_set_builder_service(client: ApiClient) -> SetBuilderService:
    return SetBuilderService(sets=_SetsRepoAdapter(SetsRepoImpl(client)))


def get_workbench(
    settings: Settings | None = None,
    *,
    session: requests.Session | None = None,
    scheduler: Scheduler | None = None,
    configure_logs: bool = True,
) -> SetWorkbench:
    settings = settings or get_settings()
    if configure_logs:
        configure_logging(settings.log_level)
    client = build_client(settings, session=session)
    return SetWorkbench(
        catalog_service=get_catalog_service(client, settings),
        part_creation=get_part_creation_service(client),
        set_builder=get_set_builder_service(client),
        scheduler=scheduler or ThreadingScheduler(),
        auto_close_delay=settings.auto_close_delay,
    )
