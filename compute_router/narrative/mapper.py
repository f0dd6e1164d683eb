"""Maps workflow step events to patient-facing narrative events."""

from __future__ import annotations

from compute_router.errors import StepNotFoundError
from compute_router.models import Target
from compute_router.narrative.types import (
    NarrativeEvent,
    NarrativeTemplate,
    PrivacyBadge,
    WorkflowEvent,
)

_BADGE_LABELS = {
    PrivacyBadge.PROCESSING_LOCAL: "Processing locally",
    PrivacyBadge.SENDING_SUMMARY: "Sending summary",
    PrivacyBadge.CLOUD_PROCESSING: "Cloud processing",
}

_BADGE_DESCRIPTIONS = {
    PrivacyBadge.PROCESSING_LOCAL: "Your images are being processed on this device.",
    PrivacyBadge.SENDING_SUMMARY: "We're sending a summary (not the full image) for advanced analysis.",
    PrivacyBadge.CLOUD_PROCESSING: "Encrypted processing in our secure data center.",
}

_TARGET_BADGES = {
    Target.EDGE: PrivacyBadge.PROCESSING_LOCAL,
    Target.WORKSTATION: PrivacyBadge.PROCESSING_LOCAL,
    Target.CLOUD: PrivacyBadge.CLOUD_PROCESSING,
}


def to_narrative(event: WorkflowEvent, template: NarrativeTemplate) -> NarrativeEvent:
    """Map one workflow event through ``template``.

    Template fields copy through; progress defaults to 0 and the event's
    privacy badge, when set, overrides the template default.

    Raises:
        StepNotFoundError: If the step is not in the template.
    """
    step = template.steps.get(event.step)
    if step is None:
        raise StepNotFoundError(event.step, template.modality)

    return NarrativeEvent(
        step=event.step,
        plain_text=step.text,
        why=step.why,
        do_now=step.do_now,
        icon=step.icon,
        progress=event.progress if event.progress is not None else 0,
        privacy_badge=event.privacy if event.privacy is not None else step.privacy,
        eta_hint=step.eta_hint,
        alert=step.alert,
    )


def to_narrative_batch(
    events: list[WorkflowEvent], template: NarrativeTemplate,
) -> list[NarrativeEvent]:
    return [to_narrative(event, template) for event in events]


def humanize_step(step: str) -> str:
    """``focus_left`` -> ``Focus Left``."""
    return " ".join(word[:1].upper() + word[1:] for word in step.split("_"))


def privacy_badge_label(badge: PrivacyBadge | str) -> str:
    """Display label for a badge; unknown badges are returned as-is."""
    try:
        return _BADGE_LABELS[PrivacyBadge(badge)]
    except ValueError:
        return str(badge)


def privacy_badge_description(badge: PrivacyBadge | str) -> str:
    """One-line explanation of a badge; empty for unknown badges."""
    try:
        return _BADGE_DESCRIPTIONS[PrivacyBadge(badge)]
    except ValueError:
        return ""


def badge_for_target(target: Target) -> PrivacyBadge:
    """Provenance badge for a routing decision."""
    return _TARGET_BADGES[Target(target)]
