"""Narrative layer: plain-language status updates for workflow steps."""

from compute_router.narrative.mapper import (
    badge_for_target,
    humanize_step,
    privacy_badge_description,
    privacy_badge_label,
    to_narrative,
    to_narrative_batch,
)
from compute_router.narrative.templates import TemplateCache, parse_template
from compute_router.narrative.types import (
    NarrativeEvent,
    NarrativeTemplate,
    PrivacyBadge,
    TemplateStep,
    WorkflowEvent,
)

__all__ = [
    "NarrativeEvent",
    "NarrativeTemplate",
    "PrivacyBadge",
    "TemplateCache",
    "TemplateStep",
    "WorkflowEvent",
    "badge_for_target",
    "humanize_step",
    "parse_template",
    "privacy_badge_description",
    "privacy_badge_label",
    "to_narrative",
    "to_narrative_batch",
]
