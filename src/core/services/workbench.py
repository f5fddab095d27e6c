from __future__ import annotations

import logging
import threading
from decimal import Decimal
from functools import partial

from core.dtos import PartDraft, PartDTO, SetDraft, SetTranslation
from core.enums import DialogState, Difficulty, SortKey, SortOrder
from core.errors import FetchError, RequestError, ValidationError
from core.services.catalog_service import CatalogService, derive_view
from core.services.part_creation_service import (
    CREATED_MESSAGE,
    PartCreationService,
    describe_part_failure,
)
from core.services.set_builder_service import (
    NO_PARTS_MESSAGE,
    SetBuilderService,
    describe_failure,
)
from core.services.staging_service import StagingList
from core.services.timers import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("electronics", "woodwork", "games", "mechanical")
AUTO_CLOSE_DELAY = 1.0  # seconds


class SetWorkbench:
    """
    Page-level state for assembling a kit from catalog parts.

    Holds the cached catalog, search/sort inputs, the staging list, the set
    form and the two dialogs (new part, create set). Every action catches the
    errors it expects and turns them into the ``error`` banner; ``success``
    carries the last confirmation. Both banners are dismissible.

    The auto-close callback may arrive on the scheduler's thread, so dialog
    transitions take ``_lock``; a timer that fires after being cancelled is
    recognised by its generation and does nothing.

    Create-set dialog::

        CLOSED --open--> EDITING --submit--> SUBMITTING --fail--> ERROR
                                                  |                 |
                                                  +--ok--> CLOSING  +--submit--> SUBMITTING
                                                             |
                                                   (auto_close_delay)
                                                             v
                                                           CLOSED
    """

    def __init__(
        self,
        *,
        catalog_service: CatalogService,
        part_creation: PartCreationService,
        set_builder: SetBuilderService,
        scheduler: Scheduler,
        auto_close_delay: float = AUTO_CLOSE_DELAY,
    ) -> None:
        self._catalog_service = catalog_service
        self._part_creation = part_creation
        self._set_builder = set_builder
        self._scheduler = scheduler
        self.auto_close_delay = auto_close_delay

        self.catalog: list[PartDTO] = []
        self.loading = False
        self.query = ""
        self.sort_key = SortKey.NAME
        self.sort_order = SortOrder.ASC

        self.staging = StagingList()
        self.draft = SetDraft()
        self.categories: list[str] = list(DEFAULT_CATEGORIES)
        self.dialog = DialogState.CLOSED

        self.part_dialog_open = False
        self.part_draft = PartDraft()
        self.creating_part = False

        self.error: str | None = None
        self.error_field: str | None = None
        self.success: str | None = None

        self._close_timer: TimerHandle | None = None
        self._close_generation = 0
        self._disposed = False
        # the auto-close callback runs on the scheduler's thread
        self._lock = threading.RLock()

    # --- Catalog ---
    def load_catalog(self) -> bool:
        """Refresh the catalog; on failure keep the previous one and raise the banner."""
        self.loading = True
        try:
            self.catalog = self._catalog_service.load_catalog()
        except FetchError as exc:
            logger.warning("Catalog refresh failed, keeping %d cached parts: %s", len(self.catalog), exc)
            self._fail(exc.message)
            return False
        finally:
            self.loading = False
        return True

    def set_search(self, query: str) -> None:
        self.query = query

    def set_sort(self, sort_key: SortKey | str, order: SortOrder | str | None = None) -> None:
        self.sort_key = SortKey.from_any(sort_key)
        if order is not None:
            self.sort_order = SortOrder.from_any(order)

    @property
    def view(self) -> list[PartDTO]:
        return derive_view(self.catalog, self.query, self.sort_key, self.sort_order)

    # --- Staging ---
    def add_part(self, part: PartDTO) -> None:
        self.staging.add_part(part)

    def remove_part(self, part_id: int) -> None:
        self.staging.remove_part(part_id)

    def set_quantity(self, part_id: int, quantity: int) -> None:
        self.staging.set_quantity(part_id, quantity)

    def set_optional(self, part_id: int, is_optional: bool) -> None:
        self.staging.set_optional(part_id, is_optional)

    def toggle_optional(self, part_id: int) -> None:
        self.staging.toggle_optional(part_id)

    def set_notes(self, part_id: int, notes: str) -> None:
        self.staging.set_notes(part_id, notes)

    @property
    def total_units(self) -> int:
        return self.staging.total_units

    @property
    def total_cost(self) -> Decimal:
        return self.staging.total_cost

    # --- New part dialog ---
    def open_part_dialog(self) -> None:
        self.part_dialog_open = True

    def close_part_dialog(self) -> None:
        self.part_dialog_open = False
        self.part_draft = PartDraft()

    def save_new_part(self) -> PartDTO | None:
        """Create the drafted part, put it at the top of the catalog and stage it.

        The dialog and its input survive a failure so the operator can fix it.
        """
        self.creating_part = True
        self.dismiss_error()
        try:
            part = self._part_creation.create_part(self.part_draft)
        except ValidationError as exc:
            self._fail(exc.message, field=exc.field)
            return None
        except RequestError as exc:
            logger.error("Creating part %r failed: %s", self.part_draft.part_number, exc)
            self._fail(describe_part_failure(exc))
            return None
        finally:
            self.creating_part = False

        self.catalog.insert(0, part)
        self.staging.add_part(part)
        self.success = CREATED_MESSAGE
        self.close_part_dialog()
        return part

    # --- Set form ---
    def set_category(self, value: str) -> None:
        category = (value or "").strip()
        self.draft.category = category
        if category and category not in self.categories:
            self.categories.append(category)

    def set_difficulty(self, value: Difficulty | str | None) -> None:
        self.draft.difficulty = Difficulty.from_any(value) if value else None

    def set_age_range(self, age_min: int, age_max: int) -> None:
        self.draft.age_min = age_min
        self.draft.age_max = age_max

    def set_duration(self, minutes: int) -> None:
        self.draft.duration_minutes = minutes

    def set_translation(
        self,
        language_code: str,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> None:
        current = self.draft.translations.get(language_code) or SetTranslation(
            language_code=language_code
        )
        if name is not None:
            current.name = name
        if description is not None:
            current.description = description
        self.draft.translations[language_code] = current

    # --- Create set dialog ---
    def open_set_dialog(self) -> bool:
        with self._lock:
            if not len(self.staging):
                self._fail(NO_PARTS_MESSAGE, field="parts")
                return False
            self._cancel_close_timer()
            self.dialog = DialogState.EDITING
            return True

    def close_set_dialog(self) -> None:
        with self._lock:
            self._cancel_close_timer()
            self.dialog = DialogState.CLOSED
            self.dismiss_error()
            self.success = None

    @property
    def submitting(self) -> bool:
        return self.dialog is DialogState.SUBMITTING

    def submit(self) -> int | None:
        """Create the set from the form and the staged parts.

        Returns the new set id, or None when the submission was refused or
        failed (the reason is in ``error``). The staging list is only cleared
        on success.
        """
        with self._lock:
            return self._submit()

    def _submit(self) -> int | None:
        if self.dialog is DialogState.SUBMITTING:
            logger.warning("Ignoring submit while another submission is in flight")
            return None
        if self.dialog not in (DialogState.EDITING, DialogState.ERROR):
            logger.warning("Ignoring submit while the create-set dialog is %s", self.dialog.value)
            return None

        self.dialog = DialogState.SUBMITTING
        self.dismiss_error()
        self.success = None
        try:
            set_id = self._set_builder.submit(self.draft, self.staging.entries)
        except ValidationError as exc:
            self.dialog = DialogState.ERROR
            self._fail(exc.message, field=exc.field)
            return None
        except RequestError as exc:
            logger.error("Creating set failed (status=%s): %s", exc.status_code, exc)
            self.dialog = DialogState.ERROR
            self._fail(describe_failure(exc))
            return None
        except Exception:
            # never leave the dialog stuck in SUBMITTING
            self.dialog = DialogState.ERROR
            raise

        name = self.draft.english.name
        self.success = f'Set "{name}" created successfully!'
        self.staging.clear()
        self.draft = SetDraft()
        self.dialog = DialogState.CLOSING
        self._schedule_close()
        return set_id

    # --- Banners / lifetime ---
    def dismiss_error(self) -> None:
        self.error = None
        self.error_field = None

    def dismiss_success(self) -> None:
        self.success = None

    def dispose(self) -> None:
        """Cancel pending timers; nothing scheduled fires after this."""
        with self._lock:
            self._disposed = True
            self._cancel_close_timer()

    def _fail(self, message: str, *, field: str | None = None) -> None:
        self.error = message
        self.error_field = field

    def _schedule_close(self) -> None:
        self._cancel_close_timer()
        if self._disposed:
            return
        self._close_generation += 1
        self._close_timer = self._scheduler.call_later(
            self.auto_close_delay, partial(self._auto_close, self._close_generation)
        )

    def _auto_close(self, generation: int) -> None:
        with self._lock:
            # a timer that was cancelled too late to stop it must not close a newer dialog
            if generation != self._close_generation:
                return
            self._close_timer = None
            if self._disposed or self.dialog is not DialogState.CLOSING:
                return
            self.close_set_dialog()

    def _cancel_close_timer(self) -> None:
        self._close_generation += 1
        if self._close_timer is not None:
            self._close_timer.cancel()
            self._close_timer = None
