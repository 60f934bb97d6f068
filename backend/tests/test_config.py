"""Tests for configuration management."""
import pytest


def test_settings_loads_required_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings should load GCP_PROJECT_ID and VERTEX_AI_LOCATION from env."""
    monkeypatch.setenv("GCP_PROJECT_ID", "my-project")
    monkeypatch.setenv("VERTEX_AI_LOCATION", "asia-northeast1")

    from catvoice.core.config import Settings
    settings = Settings()

    assert settings.gcp_project_id == "my-project"
    assert settings.vertex_ai_location == "asia-northeast1"


def test_settings_has_default_values() -> None:
    """Settings should provide sensible defaults for optional fields."""
    from catvoice.core.config import Settings
    settings = Settings(_env_file=None)

    assert settings.app_name == "catvoice"
    assert settings.model_id == "gemini-2.5-flash"
    assert settings.model_timeout_seconds == 60.0
    assert settings.model_thinking_budget == 0
    assert settings.video_consult_daily_limit == 3
    assert settings.max_video_frames == 10
    assert settings.quota_timezone == "Asia/Tokyo"
    assert settings.backend_port == 8000
    assert settings.frontend_port == 3000


def test_settings_overrides_limits_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIDEO_CONSULT_DAILY_LIMIT", "5")
    monkeypatch.setenv("MODEL_TIMEOUT_SECONDS", "12.5")

    from catvoice.core.config import Settings
    settings = Settings(_env_file=None)

    assert settings.video_consult_daily_limit == 5
    assert settings.model_timeout_seconds == 12.5


def test_settings_missing_required_field(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings should raise an error when required fields are missing and no .env file."""
    monkeypatch.delenv("GCP_PROJECT_ID", raising=False)
    monkeypatch.delenv("VERTEX_AI_LOCATION", raising=False)

    from pydantic import ValidationError
    from catvoice.core.config import Settings

    # Pass _env_file=None to bypass .env file reading
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
