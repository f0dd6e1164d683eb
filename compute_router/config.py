"""Narrative service settings, overridable from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

BUNDLED_TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass
class Settings:
    """Narrative service configuration."""
    host: str = "0.0.0.0"
    port: int = 3001
    templates_dir: Path = field(default_factory=lambda: BUNDLED_TEMPLATES_DIR)
    default_modality: str = "oct"
    language: str = "en"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from environment variables, falling back to defaults.

        Raises:
            ValueError: If ``PORT`` is not an integer.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        port_raw = env.get("PORT")
        try:
            port = int(port_raw) if port_raw else defaults.port
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port_raw!r}") from None
        templates_dir = env.get("NARRATIVE_TEMPLATES_DIR")
        return cls(
            host=env.get("NARRATIVE_HOST", defaults.host),
            port=port,
            templates_dir=Path(templates_dir) if templates_dir else defaults.templates_dir,
            default_modality=env.get("NARRATIVE_DEFAULT_MODALITY", defaults.default_modality),
            language=env.get("NARRATIVE_LANGUAGE", defaults.language),
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )
