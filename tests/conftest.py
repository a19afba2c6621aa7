# tests/conftest.py

from __future__ import annotations

from typing import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from adapters.http_client import build_async_client
from adapters.task_api import TaskApiClient
from core.config import AppSettings

from .fakes import BASE_URL, FakeTasksApi


@pytest.fixture()
def settings() -> AppSettings:
    """
    Settings pinned to the fake API host.

    `_env_file=None` keeps a developer's local/user .env out of the tests.
    """
    return AppSettings(api_base_url=BASE_URL + "/", http_timeout_seconds=5, _env_file=None)


@pytest.fixture()
def api() -> FakeTasksApi:
    return FakeTasksApi()


@pytest_asyncio.fixture()
async def http_client(settings: AppSettings, api: FakeTasksApi) -> AsyncIterator[httpx.AsyncClient]:
    async with build_async_client(settings, transport=api.transport()) as client:
        yield client


@pytest.fixture()
def task_client(settings: AppSettings, http_client: httpx.AsyncClient) -> TaskApiClient:
    return TaskApiClient(settings, client=http_client)
