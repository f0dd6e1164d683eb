"""Narrative layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PrivacyBadge(str, Enum):
    """Where the patient's data is being processed."""

    PROCESSING_LOCAL = "processing_local"
    SENDING_SUMMARY = "sending_summary"
    CLOUD_PROCESSING = "cloud_processing"


@dataclass
class WorkflowEvent:
    """Step-progress event emitted by a workflow."""
    step: str
    progress: int | None = None      # 0-100
    privacy: PrivacyBadge | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkflowEvent:
        """Parse an inbound JSON payload.

        Raises:
            ValueError: If ``step`` is missing, ``progress`` is not an integer
                0-100, or ``privacy`` is not a known badge.
        """
        if not isinstance(data, dict) or not isinstance(data.get("step"), str):
            raise ValueError("Workflow event requires a string 'step'")
        progress = data.get("progress")
        if progress is not None and (
            isinstance(progress, bool) or not isinstance(progress, int) or not 0 <= progress <= 100
        ):
            raise ValueError(f"Workflow event progress must be an integer 0-100, got {progress!r}")
        privacy = data.get("privacy")
        return cls(
            step=data["step"],
            progress=progress,
            privacy=PrivacyBadge(privacy) if privacy is not None else None,
        )


@dataclass
class TemplateStep:
    text: str
    why: str
    do_now: str
    icon: str
    privacy: PrivacyBadge
    eta_hint: str | None = None
    alert: str | None = None


@dataclass
class NarrativeTemplate:
    """Per-modality mapping of step name to display text."""
    modality: str
    version: str
    steps: dict[str, TemplateStep] = field(default_factory=dict)


@dataclass
class NarrativeEvent:
    """Patient-facing display event."""

    step: str
    plain_text: str
    why: str
    do_now: str
    icon: str
    progress: int
    privacy_badge: PrivacyBadge
    eta_hint: str | None = None
    alert: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": self.step,
            "plainText": self.plain_text,
            "why": self.why,
            "doNow": self.do_now,
            "icon": self.icon,
            "progress": self.progress,
            "privacyBadge": self.privacy_badge.value,
            "etaHint": self.eta_hint,
            "alert": self.alert,
        }
