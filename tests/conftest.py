import json
import os
import sys

import pytest
import requests

# Ensure repo root and 'src/' are on sys.path for imports like 'from core import enums'
_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

_SRC_PATH = os.path.join(_REPO_ROOT, "src")
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from core.dtos import CreatedSetDTO, PartDTO  # noqa: E402
from core.errors import RequestError  # noqa: E402
from core.services.catalog_service import CatalogService  # noqa: E402
from core.services.part_creation_service import PartCreationService  # noqa: E402
from core.services.set_builder_service import SetBuilderService  # noqa: E402
from core.services.workbench import SetWorkbench  # noqa: E402

API_ENV_VAR = "API_BASE_URL"


def pytest_addoption(parser):
    parser.addoption(
        "--api-base-url",
        action="store",
        default=None,
        help="Override base URL for contract tests (e.g. http://localhost:5001/api)",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "contract: mark a test as a contract test")


@pytest.fixture(scope="session")
def api_base_url(pytestconfig):
    # Priority: CLI flag > env var > None (contract tests will skip)
    cli = pytestconfig.getoption("--api-base-url")
    if cli:
        return cli
    return os.environ.get(API_ENV_VAR)


@pytest.fixture
def skip_if_no_api(api_base_url):
    if not api_base_url:
        pytest.skip(
            f"Skipping contract tests: {API_ENV_VAR} is unset and --api-base-url not provided"
        )


# --- HTTP fakes ---


def make_response(status_code=200, body=None, *, reason="OK", raw=None):
    """Build a real requests.Response carrying a JSON (or raw) body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    if raw is not None:
        resp._content = raw
    elif body is not None:
        resp._content = json.dumps(body).encode("utf-8")
    else:
        resp._content = b""
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeSession:
    """Stands in for requests.Session; replays queued responses or exceptions."""

    def __init__(self, *outcomes):
        self.headers = {}
        self.calls = []
        self._outcomes = list(outcomes)
        self.closed = False

    def queue(self, outcome):
        self._outcomes.append(outcome)

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "params": params, "json": json, "timeout": timeout}
        )
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession()


# --- Timer fake ---


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.callback()


class FakeScheduler:
    def __init__(self):
        self.timers = []

    def call_later(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer


@pytest.fixture
def scheduler():
    return FakeScheduler()


# --- Catalog data ---


def make_part(part_id, **overrides):
    data = {
        "part_id": part_id,
        "part_number": f"P-{part_id:03d}",
        "part_name": f"Part {part_id}",
        "category": "electronics",
        "unit_of_measure": "pcs",
        "unit_cost": 1.0,
        "stock_quantity": 10,
        "minimum_stock_level": 2,
    }
    data.update(overrides)
    return PartDTO.model_validate(data)


@pytest.fixture
def catalog():
    return [
        make_part(
            1,
            part_number="LED-5MM",
            part_name="Red LED",
            category="electronics",
            unit_cost=0.25,
            stock_quantity=120,
            description="5 mm diffused LED",
            supplier="Mouser",
        ),
        make_part(
            2,
            part_number="SCR-M3",
            part_name="m3 screw",
            category="mechanical",
            unit_cost=0.05,
            stock_quantity=500,
            supplier="Bossard",
        ),
        make_part(
            3,
            part_number="TL-SOLDER",
            part_name="Soldering Iron",
            category="tool",
            unit_cost=24.9,
            stock_quantity=3,
            description="Adjustable temperature",
        ),
        make_part(
            4,
            part_number="WD-PLY3",
            part_name="Birch Plywood 3mm",
            category="woodwork",
            unit_cost=None,
            stock_quantity=0,
            supplier=None,
        ),
    ]


# --- Service fakes ---


class FakePartsCatalog:
    def __init__(self, parts=None, error=None):
        self.parts = list(parts or [])
        self.error = error
        self.calls = 0

    def list(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.parts)


class FakePartsWriter:
    def __init__(self, next_id=100, error=None):
        self.next_id = next_id
        self.error = error
        self.drafts = []

    def create(self, *, draft):
        self.drafts.append(draft)
        if self.error is not None:
            raise self.error
        english = draft.translation("en")
        return PartDTO(
            part_id=self.next_id,
            part_number=draft.part_number,
            part_name=english.part_name if english else "",
            category=draft.category,
            unit_cost=draft.unit_cost,
            stock_quantity=draft.stock_quantity,
            minimum_stock_level=draft.minimum_stock_level,
        )


class FakeSetsRepo:
    def __init__(self, set_id=42, error=None):
        self.set_id = set_id
        self.error = error
        self.payloads = []

    def create(self, *, payload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return CreatedSetDTO(set_id=self.set_id, message="Set created successfully")


@pytest.fixture
def parts_catalog(catalog):
    return FakePartsCatalog(catalog)


@pytest.fixture
def parts_writer():
    return FakePartsWriter()


@pytest.fixture
def sets_repo():
    return FakeSetsRepo()


@pytest.fixture
def workbench(parts_catalog, parts_writer, sets_repo, scheduler):
    wb = SetWorkbench(
        catalog_service=CatalogService(parts=parts_catalog),
        part_creation=PartCreationService(parts=parts_writer),
        set_builder=SetBuilderService(sets=sets_repo),
        scheduler=scheduler,
    )
    yield wb
    wb.dispose()


def conflict_error():
    return RequestError("Request failed with status code 409", status_code=409)
