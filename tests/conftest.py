from typing import AsyncGenerator

import httpx
import pytest

from tutor_admin.api.client import ApiClient
from tutor_admin.auth.session_store import SessionStore
from tutor_admin.console import AdminConsole

from fake_backend import API_PATH, FakeSheet, build_app

BASE_URL = "http://test"
API_URL = BASE_URL + API_PATH


@pytest.fixture()
def sheet() -> FakeSheet:
    """Spreadsheet contents behind the fake endpoint."""
    s = FakeSheet()
    s.students = [
        {"Code": "S1", "Name": "Ada", "Phone": "08012345678", "School": "ATBU", "CreatedAt": "2024-01-01"},
    ]
    return s


@pytest.fixture()
async def http_client(sheet: FakeSheet) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client bound to the fake FastAPI app."""
    transport = httpx.ASGITransport(app=build_app(sheet))
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture()
def api(http_client: httpx.AsyncClient) -> ApiClient:
    return ApiClient(API_URL, client=http_client)


@pytest.fixture()
def session_store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "session")


@pytest.fixture()
def console(api: ApiClient, session_store: SessionStore) -> AdminConsole:
    return AdminConsole(api, session_store)
