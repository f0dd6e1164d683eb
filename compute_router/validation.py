"""Construction-boundary checks for routing contexts."""

from __future__ import annotations

from loguru import logger

from compute_router.errors import ValidationError
from compute_router.models import (
    Context,
    CostBudget,
    ModelSpec,
    ModelTier,
    PayloadType,
    Privacy,
    VramBudget,
    is_finite_number,
)


def _check_number(problems: list[str], name: str, value, *, positive: bool = False) -> None:
    if not is_finite_number(value):
        problems.append(f"{name} must be a finite number, got {value!r}")
    elif positive and value <= 0:
        problems.append(f"{name} must be > 0, got {value}")
    elif not positive and value < 0:
        problems.append(f"{name} must be >= 0, got {value}")


def validate(ctx: Context) -> Context:
    """Return ``ctx`` unchanged if well-formed.

    The gates assume every field holds a finite, in-range value of the
    right type; this is where that assumption is enforced.

    Raises:
        ValidationError: Listing every problem found.
    """
    problems: list[str] = []

    _check_number(problems, "sla_ms", ctx.sla_ms, positive=True)
    _check_number(problems, "uplink_mbps", ctx.uplink_mbps)
    _check_number(problems, "jitter_ms", ctx.jitter_ms)

    if not isinstance(ctx.payload_type, PayloadType):
        problems.append(f"payload_type must be a PayloadType, got {ctx.payload_type!r}")
    if not isinstance(ctx.privacy, Privacy):
        problems.append(f"privacy must be a Privacy, got {ctx.privacy!r}")

    if isinstance(ctx.vrams, VramBudget):
        _check_number(problems, "vrams.edge_gb", ctx.vrams.edge_gb)
        _check_number(problems, "vrams.workstation_gb", ctx.vrams.workstation_gb)
    else:
        problems.append(f"vrams must be a VramBudget, got {ctx.vrams!r}")

    if isinstance(ctx.model, ModelSpec):
        if not isinstance(ctx.model.name, str) or not ctx.model.name:
            problems.append("model.name must be a non-empty string")
        _check_number(problems, "model.vram_gb", ctx.model.vram_gb, positive=True)
        if not isinstance(ctx.model.tier, ModelTier):
            problems.append(f"model.tier must be a ModelTier, got {ctx.model.tier!r}")
    else:
        problems.append(f"model must be a ModelSpec, got {ctx.model!r}")

    if isinstance(ctx.cost, CostBudget):
        _check_number(problems, "cost.daily_budget_usd", ctx.cost.daily_budget_usd)
        _check_number(problems, "cost.spent_usd", ctx.cost.spent_usd)
    else:
        problems.append(f"cost must be a CostBudget, got {ctx.cost!r}")

    if problems:
        logger.warning(f"Context rejected: {len(problems)} problem(s): {'; '.join(problems)}")
        raise ValidationError(problems)
    return ctx
