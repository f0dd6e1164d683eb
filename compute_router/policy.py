"""Local compute decision policy.

Routes each operation to the edge device, the workstation or the cloud.
Gate order (first match wins):
  1. Privacy: raw PHI stays on the workstation if the SLA is interactive
  2. SLA: ultra-low latency with a tiny model runs on the edge
  3. VRAM: model larger than workstation memory goes to the cloud
  4. Connectivity: poor uplink or high jitter stays local
  5. Cost: exhausted budget stays local (degraded mode)
  6. Default: workstation for interactive work, cloud for async
"""

from __future__ import annotations

from loguru import logger

from compute_router.gates import evaluate
from compute_router.models import (
    Context,
    CostBudget,
    ModelSpec,
    ModelTier,
    PayloadType,
    Privacy,
    RouteDecision,
    Target,
    VramBudget,
)
from compute_router.validation import validate


def decide(ctx: Context) -> Target:
    """Decide where to execute an operation. Pure and deterministic."""
    return evaluate(ctx).target


def explain(ctx: Context) -> str:
    """Human-readable rationale for :func:`decide`, for debugging and provenance logs."""
    return evaluate(ctx).reason


def route(ctx: Context) -> RouteDecision:
    """Validate ``ctx`` and return the full routing decision.

    Raises:
        ValidationError: If the context is malformed.
    """
    decision = evaluate(validate(ctx))
    logger.debug(f"Route: {decision.target.value} ({decision.gate.value}) | {ctx.model.name} | {decision.reason}")
    return decision


def default_context() -> Context:
    """Typical workstation with good connectivity, small model, raw PHI, under budget."""
    return Context(
        sla_ms=200,
        payload_type=PayloadType.RAW_IMAGE,
        uplink_mbps=100,
        jitter_ms=10,
        vrams=VramBudget(edge_gb=8, workstation_gb=48),
        model=ModelSpec(name="retina/seg", vram_gb=4, tier=ModelTier.SMALL),
        privacy=Privacy.PHI_RAW,
        cost=CostBudget(daily_budget_usd=100, spent_usd=0),
    )
