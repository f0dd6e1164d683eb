"""Ordered routing gates.

Each gate is a predicate/outcome pair; :func:`evaluate` walks them in
order and the first match wins.  ``decide`` and ``explain`` both read the
single :class:`RouteDecision` produced here, so they can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from compute_router.models import Context, GateName, ModelTier, Privacy, RouteDecision, Target

# Thresholds. Operators are part of the policy: see each predicate.
INTERACTIVE_SLA_MS = 500
EDGE_SLA_MS = 50
MIN_UPLINK_MBPS = 20
MAX_JITTER_MS = 30


@dataclass(frozen=True)
class Gate:
    """A single rule in the routing policy."""

    name: GateName
    label: str
    matches: Callable[[Context], bool]
    target: Callable[[Context], Target]
    describe: Callable[[Context], str]  # Triggering values, e.g. "raw PHI with SLA 200ms"


def _fmt(value: float) -> str:
    """Render 4.0 as '4' and 0.5 as '0.5'."""
    return f"{value:g}"


def _is_interactive(ctx: Context) -> bool:
    return ctx.sla_ms <= INTERACTIVE_SLA_MS


def _const(target: Target) -> Callable[[Context], Target]:
    return lambda ctx: target


GATES: tuple[Gate, ...] = (
    # Raw PHI stays in local custody unless the latency budget allows async cloud use
    Gate(
        GateName.PRIVACY, "Privacy gate",
        matches=lambda ctx: ctx.privacy == Privacy.PHI_RAW and _is_interactive(ctx),
        target=_const(Target.WORKSTATION),
        describe=lambda ctx: f"raw PHI with SLA {_fmt(ctx.sla_ms)}ms",
    ),
    # Only tiny models fit a sub-50ms budget on the edge device
    Gate(
        GateName.LATENCY, "SLA gate",
        matches=lambda ctx: ctx.sla_ms <= EDGE_SLA_MS and ctx.model.tier == ModelTier.TINY,
        target=_const(Target.EDGE),
        describe=lambda ctx: f"ultra-low latency {_fmt(ctx.sla_ms)}ms, tiny model",
    ),
    Gate(
        GateName.CAPACITY, "VRAM gate",
        matches=lambda ctx: ctx.model.vram_gb > ctx.vrams.workstation_gb,
        target=_const(Target.CLOUD),
        describe=lambda ctx: (
            f"model {ctx.model.name} {_fmt(ctx.model.vram_gb)}GB > "
            f"workstation {_fmt(ctx.vrams.workstation_gb)}GB"
        ),
    ),
    Gate(
        GateName.CONNECTIVITY, "Connectivity gate",
        matches=lambda ctx: ctx.uplink_mbps < MIN_UPLINK_MBPS or ctx.jitter_ms > MAX_JITTER_MS,
        target=_const(Target.WORKSTATION),
        describe=lambda ctx: f"uplink {_fmt(ctx.uplink_mbps)}Mbps, jitter {_fmt(ctx.jitter_ms)}ms",
    ),
    # Exactly at budget counts as exhausted
    Gate(
        GateName.COST, "Cost gate",
        matches=lambda ctx: ctx.cost.spent_usd >= ctx.cost.daily_budget_usd,
        target=_const(Target.WORKSTATION),
        describe=lambda ctx: (
            f"spent ${_fmt(ctx.cost.spent_usd)} >= budget ${_fmt(ctx.cost.daily_budget_usd)}"
        ),
    ),
    Gate(
        GateName.DEFAULT, "Default routing",
        matches=lambda ctx: True,
        target=lambda ctx: Target.WORKSTATION if _is_interactive(ctx) else Target.CLOUD,
        describe=lambda ctx: (
            f"SLA {_fmt(ctx.sla_ms)}ms, "
            f"{'interactive' if _is_interactive(ctx) else 'async'}"
        ),
    ),
)


def evaluate(ctx: Context) -> RouteDecision:
    """Run the gates in order and return the first match."""
    for gate in GATES:
        if gate.matches(ctx):
            target = gate.target(ctx)
            return RouteDecision(
                target=target,
                gate=gate.name,
                reason=f"Routed to {target.value}: {gate.label} ({gate.describe(ctx)})",
            )
    # GATES ends with an always-true default
    raise AssertionError("no routing gate matched")
