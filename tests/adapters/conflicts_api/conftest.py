"""Shared fixtures for conflicts service adapter tests."""

from __future__ import annotations

import httpx
import pytest

from qlconflicts.adapters.conflicts_api import ConflictsApiClient
from tests.helpers.conflicts_api import FakeConflictsService, remote_config


@pytest.fixture
def fake_service() -> FakeConflictsService:
    return FakeConflictsService()


@pytest.fixture
def api_client(fake_service: FakeConflictsService) -> ConflictsApiClient:
    return ConflictsApiClient(
        config=remote_config(),
        transport=httpx.MockTransport(fake_service.handler),
    )
