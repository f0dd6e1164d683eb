"""Tests for service settings."""

from pathlib import Path

import pytest

from compute_router.config import BUNDLED_TEMPLATES_DIR, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.port == 3001
    assert settings.default_modality == "oct"
    assert settings.templates_dir == BUNDLED_TEMPLATES_DIR
    assert (BUNDLED_TEMPLATES_DIR / "oct.v1.yaml").is_file()


def test_env_overrides():
    settings = Settings.from_env({
        "PORT": "8080",
        "NARRATIVE_HOST": "127.0.0.1",
        "NARRATIVE_TEMPLATES_DIR": "/srv/templates",
        "NARRATIVE_DEFAULT_MODALITY": "vis",
        "NARRATIVE_LANGUAGE": "es",
        "LOG_LEVEL": "debug",
    })
    assert settings.port == 8080
    assert settings.host == "127.0.0.1"
    assert settings.templates_dir == Path("/srv/templates")
    assert settings.default_modality == "vis"
    assert settings.language == "es"
    assert settings.log_level == "DEBUG"


def test_bad_port():
    with pytest.raises(ValueError, match="PORT must be an integer"):
        Settings.from_env({"PORT": "http"})


def test_settings_is_documented():
    assert Settings.__doc__ == "Narrative service configuration."
