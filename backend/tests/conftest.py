"""Shared test fixtures and configuration."""
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from catvoice.models.cat import CatProfile


@pytest.fixture(autouse=True)
def set_required_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set required GCP environment variables for all tests."""
    monkeypatch.setenv("GCP_PROJECT_ID", "test-project")
    monkeypatch.setenv("VERTEX_AI_LOCATION", "us-central1")


@pytest.fixture
def cat() -> CatProfile:
    return CatProfile(
        name="Mochi",
        breed="Munchkin",
        age=3,
        gender="female",
        personality="clingy",
    )


def make_model_client(*replies: object) -> MagicMock:
    """Model client mock whose generate() returns replies in order.

    dict replies are JSON-encoded; str replies are returned verbatim;
    exceptions are raised.
    """
    side_effect = [json.dumps(r, ensure_ascii=False) if isinstance(r, dict) else r for r in replies]
    client = MagicMock()
    client.generate = AsyncMock(side_effect=side_effect)
    return client


@pytest.fixture
def model_client_factory():
    return make_model_client
