"""YAML narrative template loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from compute_router.errors import TemplateError, TemplateNotFoundError
from compute_router.narrative.types import NarrativeTemplate, PrivacyBadge, TemplateStep


def parse_template(data: Any, source: str = "<memory>") -> NarrativeTemplate:
    """Build a :class:`NarrativeTemplate` from a parsed YAML document.

    Raises:
        TemplateError: If required keys are missing or a step is malformed.
    """
    if (
        not isinstance(data, dict)
        or not all(data.get(k) for k in ("modality", "version", "steps"))
        or not isinstance(data["steps"], dict)
    ):
        raise TemplateError(f"Invalid template structure in {source}")
    steps: dict[str, TemplateStep] = {}
    for name, raw in data["steps"].items():
        try:
            steps[name] = TemplateStep(
                text=raw["text"],
                why=raw["why"],
                do_now=raw["doNow"],
                icon=raw["icon"],
                privacy=PrivacyBadge(raw["privacy"]),
                eta_hint=raw.get("etaHint"),
                alert=raw.get("alert"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TemplateError(f"Invalid step '{name}' in {source}: {e}") from e
    return NarrativeTemplate(modality=data["modality"], version=str(data["version"]), steps=steps)


class TemplateCache:
    """Loads templates from a directory and keeps them for the owner's lifetime.

    One instance per service; nothing is shared between instances.
    """

    def __init__(self, templates_dir: Path | str):
        self.templates_dir = Path(templates_dir)
        self._cache: dict[str, NarrativeTemplate] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def load(self, modality: str, language: str = "en") -> NarrativeTemplate:
        """Load ``<modality>.v1.<language>.yaml``, falling back to ``<modality>.v1.yaml``.

        Raises:
            TemplateNotFoundError: If neither file exists.
            TemplateError: If the file is not a valid template.
        """
        key = f"{modality}.{language}"
        if key in self._cache:
            return self._cache[key]

        for filename in (f"{modality}.v1.{language}.yaml", f"{modality}.v1.yaml"):
            path = self.templates_dir / filename
            if path.is_file():
                break
        else:
            raise TemplateNotFoundError(
                f'Template not found for modality "{modality}" language "{language}"'
            )

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise TemplateError(f"Could not parse {path.name}: {e}") from e

        template = parse_template(data, source=path.name)
        self._cache[key] = template
        logger.info(f"Loaded narrative template {path.name} ({len(template.steps)} steps)")
        return template

    def load_all(self, language: str = "en") -> dict[str, NarrativeTemplate]:
        """Load every template in the directory, keyed by modality. Bad files are skipped."""
        templates: dict[str, NarrativeTemplate] = {}
        if not self.templates_dir.is_dir():
            logger.warning(f"Templates directory not found: {self.templates_dir}")
            return templates
        for path in sorted(self.templates_dir.glob("*.yaml")):
            modality = path.name.split(".")[0]
            if modality in templates:
                continue
            try:
                templates[modality] = self.load(modality, language)
            except TemplateError as e:
                logger.warning(f"Failed to load template {path.name}: {e}")
        return templates

    def clear(self) -> None:
        self._cache.clear()
