"""Core data models for compute-router."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any

from compute_router.errors import ValidationError


class Target(str, Enum):
    """Execution tier a task is routed to."""

    EDGE = "edge"
    WORKSTATION = "workstation"
    CLOUD = "cloud"


class PayloadType(str, Enum):
    RAW_IMAGE = "raw_image"
    FEATURES = "features"
    METRICS = "metrics"


class Privacy(str, Enum):
    """PHI ring of the data, strictest first."""

    PHI_RAW = "phi_raw"
    PHI_MASKED = "phi_masked"
    DEIDENTIFIED = "deidentified"


class ModelTier(str, Enum):
    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class GateName(str, Enum):
    """Routing gates in evaluation order."""

    PRIVACY = "privacy"
    LATENCY = "latency"
    CAPACITY = "capacity"
    CONNECTIVITY = "connectivity"
    COST = "cost"
    DEFAULT = "default"


@dataclass(frozen=True)
class ModelSpec:
    """Resource footprint of the model being routed."""
    name: str
    vram_gb: float
    tier: ModelTier


@dataclass(frozen=True)
class VramBudget:
    """Accelerator memory available on each local tier."""
    edge_gb: float
    workstation_gb: float


@dataclass(frozen=True)
class CostBudget:
    """Spend tracking for the current budget period."""
    daily_budget_usd: float
    spent_usd: float


@dataclass(frozen=True)
class Context:
    """Everything the routing policy needs to know about one task.

    Built fresh per task and never mutated; use :meth:`replace` to derive
    a variant.
    """

    sla_ms: float
    payload_type: PayloadType
    uplink_mbps: float
    jitter_ms: float
    vrams: VramBudget
    model: ModelSpec
    privacy: Privacy
    cost: CostBudget

    def replace(self, **changes: Any) -> Context:
        """Return a copy with the given top-level fields overridden."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase payload used on the wire."""
        return {
            "slaMs": self.sla_ms,
            "payloadType": self.payload_type.value,
            "uplinkMbps": self.uplink_mbps,
            "jitterMs": self.jitter_ms,
            "vrams": {
                "edgeGB": self.vrams.edge_gb,
                "workstationGB": self.vrams.workstation_gb,
            },
            "model": {
                "name": self.model.name,
                "vramGB": self.model.vram_gb,
                "tier": self.model.tier.value,
            },
            "privacy": self.privacy.value,
            "cost": {
                "dailyBudgetUsd": self.cost.daily_budget_usd,
                "spentUsd": self.cost.spent_usd,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Context:
        """Parse a camelCase payload, rejecting missing fields and unknown categories.

        Raises:
            ValidationError: If the payload cannot describe a well-formed context.
        """
        from compute_router.validation import validate

        problems: list[str] = []

        def field_(obj: Any, key: str, path: str) -> Any:
            if not isinstance(obj, dict) or key not in obj:
                problems.append(f"missing field '{path}'")
                return None
            return obj[key]

        def number(obj: Any, key: str, path: str) -> float | None:
            value = field_(obj, key, path)
            if value is None:
                return None
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                problems.append(f"'{path}' must be a number, got {value!r}")
                return None
            return value

        def category(enum_cls: type[Enum], obj: Any, key: str, path: str) -> Any:
            value = field_(obj, key, path)
            if value is None:
                return None
            try:
                return enum_cls(value)
            except ValueError:
                valid = ", ".join(m.value for m in enum_cls)
                problems.append(f"unknown {path} '{value}' (expected one of: {valid})")
                return None

        vrams = field_(data, "vrams", "vrams")
        model = field_(data, "model", "model")
        cost = field_(data, "cost", "cost")

        values = {
            "sla_ms": number(data, "slaMs", "slaMs"),
            "payload_type": category(PayloadType, data, "payloadType", "payloadType"),
            "uplink_mbps": number(data, "uplinkMbps", "uplinkMbps"),
            "jitter_ms": number(data, "jitterMs", "jitterMs"),
            "privacy": category(Privacy, data, "privacy", "privacy"),
        }
        edge_gb = number(vrams, "edgeGB", "vrams.edgeGB") if vrams is not None else None
        ws_gb = number(vrams, "workstationGB", "vrams.workstationGB") if vrams is not None else None
        model_name = field_(model, "name", "model.name") if model is not None else None
        model_vram = number(model, "vramGB", "model.vramGB") if model is not None else None
        model_tier = category(ModelTier, model, "tier", "model.tier") if model is not None else None
        budget = number(cost, "dailyBudgetUsd", "cost.dailyBudgetUsd") if cost is not None else None
        spent = number(cost, "spentUsd", "cost.spentUsd") if cost is not None else None

        if problems:
            raise ValidationError(problems)

        ctx = cls(
            vrams=VramBudget(edge_gb=edge_gb, workstation_gb=ws_gb),
            model=ModelSpec(name=model_name, vram_gb=model_vram, tier=model_tier),
            cost=CostBudget(daily_budget_usd=budget, spent_usd=spent),
            **values,
        )
        return validate(ctx)


@dataclass(frozen=True)
class RouteDecision:
    """Result of one pass over the routing gates."""

    target: Target
    gate: GateName
    reason: str  # Human-readable rationale naming the triggering values

    def as_dict(self) -> dict[str, str]:
        return {k: (v.value if isinstance(v, Enum) else v) for k, v in asdict(self).items()}


def is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )
