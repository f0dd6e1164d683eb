"""compute-router: deterministic edge/workstation/cloud placement for PHI workloads."""

from compute_router.errors import RouterError, ValidationError
from compute_router.gates import GATES, evaluate
from compute_router.models import (
    Context,
    CostBudget,
    GateName,
    ModelSpec,
    ModelTier,
    PayloadType,
    Privacy,
    RouteDecision,
    Target,
    VramBudget,
)
from compute_router.policy import decide, default_context, explain, route
from compute_router.validation import validate

__all__ = [
    "Context",
    "CostBudget",
    "GATES",
    "GateName",
    "ModelSpec",
    "ModelTier",
    "PayloadType",
    "Privacy",
    "RouteDecision",
    "RouterError",
    "Target",
    "ValidationError",
    "VramBudget",
    "decide",
    "default_context",
    "evaluate",
    "explain",
    "route",
    "validate",
]
