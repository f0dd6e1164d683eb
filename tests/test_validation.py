"""Tests for context validation."""

import math

import pytest

from compute_router import (
    CostBudget,
    ModelSpec,
    ModelTier,
    ValidationError,
    VramBudget,
    default_context,
    validate,
)
from compute_router.errors import RouterError


def test_valid_context_passes_through():
    ctx = default_context()
    assert validate(ctx) is ctx


@pytest.mark.parametrize("changes, field", [
    (dict(sla_ms=0), "sla_ms"),
    (dict(sla_ms=-10), "sla_ms"),
    (dict(sla_ms=math.inf), "sla_ms"),
    (dict(uplink_mbps=-1), "uplink_mbps"),
    (dict(jitter_ms=math.nan), "jitter_ms"),
    (dict(vrams=VramBudget(edge_gb=-1, workstation_gb=48)), "vrams.edge_gb"),
    (dict(model=ModelSpec(name="m", vram_gb=0, tier=ModelTier.TINY)), "model.vram_gb"),
    (dict(model=ModelSpec(name="", vram_gb=1, tier=ModelTier.TINY)), "model.name"),
    (dict(cost=CostBudget(daily_budget_usd=-5, spent_usd=0)), "cost.daily_budget_usd"),
    (dict(privacy="phi_raw"), "privacy"),
    (dict(payload_type="video"), "payload_type"),
    (dict(model=ModelSpec(name="m", vram_gb=1, tier="huge")), "model.tier"),
    (dict(sla_ms=True), "sla_ms"),
])
def test_rejects_malformed(changes, field):
    with pytest.raises(ValidationError) as exc:
        validate(default_context().replace(**changes))
    assert any(p.startswith(field) for p in exc.value.problems)


def test_collects_all_problems():
    ctx = default_context().replace(sla_ms=-1, uplink_mbps=-1, jitter_ms=-1)
    with pytest.raises(ValidationError) as exc:
        validate(ctx)
    assert len(exc.value.problems) == 3


def test_zero_budget_and_spend_are_allowed():
    ctx = default_context().replace(cost=CostBudget(daily_budget_usd=0, spent_usd=0), uplink_mbps=0)
    assert validate(ctx) is ctx


def test_validation_error_hierarchy():
    err = ValidationError(["x"])
    assert isinstance(err, RouterError)
    assert isinstance(err, ValueError)
    assert str(err) == "Invalid context: x"
