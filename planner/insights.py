from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple
from .envelope import EnvelopeResult, evaluate_envelope
from .geometry import distance_2d, distance_to_center
from .model import OVERLAP_FACTOR, ArenaState, Target, TargetAssignment, ThreatLevel

class CoverageHealth(Enum):
    OPTIMAL = "Optimal"
    ACCEPTABLE = "Acceptable"
    DEGRADED = "Degraded"

HEALTH_MESSAGES = {
    CoverageHealth.OPTIMAL: "All targets tracked with clean envelopes and no assignment conflicts.",
    CoverageHealth.ACCEPTABLE: "Monitor overlapping coverage and resolve unassigned targets soon.",
    CoverageHealth.DEGRADED: "Critical routing issues detected. Redistribute squads and expand coverage.",
}

@dataclass(frozen=True)
class OverlapConflict:
    pair: Tuple[Target, Target]
    distance: float

@dataclass(frozen=True)
class Insights:
    total: int
    critical: int
    assigned: int
    utilization: float  # Percent of targets with a squad
    overlap_count: int
    conflicts: List[OverlapConflict]
    mean_distance: float
    health: CoverageHealth
    message: str
    envelopes: Dict[str, EnvelopeResult] = field(default_factory=dict)

def compute_overlap_conflicts(targets: Sequence[Target], coverage_radius: float) -> List[OverlapConflict]:
    """Return every unordered pair closer than the overlap threshold."""
    threshold = coverage_radius * OVERLAP_FACTOR
    conflicts: List[OverlapConflict] = []
    for i in range(len(targets)):
        for j in range(i + 1, len(targets)):
            a, b = targets[i], targets[j]
            d = distance_2d(a.pos, b.pos)
            if d < threshold:
                conflicts.append(OverlapConflict(pair=(a, b), distance=d))
    return conflicts

def mean_travel_distance(targets: Sequence[Target], width: float, height: float) -> float:
    """Mean distance from each target to the arena center (0 when empty)."""
    total = sum(distance_to_center(t.pos, width, height) for t in targets)
    return total / max(len(targets), 1)

def classify_health(total: int, assigned: int, overlap_count: int) -> CoverageHealth:
    # An empty arena is Optimal: 0 == 0 and no overlaps
    if assigned == total and overlap_count == 0:
        return CoverageHealth.OPTIMAL
    if assigned >= total * 0.6 and overlap_count < total * 0.2:
        return CoverageHealth.ACCEPTABLE
    return CoverageHealth.DEGRADED

def compute_insights(state: ArenaState) -> Insights:
    """Derive all arena metrics from a snapshot. Pure and deterministic."""
    cfg = state.config
    targets = state.targets

    total = len(targets)
    critical = sum(1 for t in targets if t.threat == ThreatLevel.CRITICAL)
    assigned = sum(1 for t in targets if t.assignment != TargetAssignment.UNASSIGNED)
    utilization = 0.0 if total == 0 else assigned / total * 100

    conflicts = compute_overlap_conflicts(targets, cfg.coverage_radius)
    health = classify_health(total, assigned, len(conflicts))

    return Insights(
        total=total,
        critical=critical,
        assigned=assigned,
        utilization=utilization,
        overlap_count=len(conflicts),
        conflicts=conflicts,
        mean_distance=mean_travel_distance(targets, cfg.width, cfg.height),
        health=health,
        message=HEALTH_MESSAGES[health],
        envelopes={t.id: evaluate_envelope(t, cfg.coverage_radius, cfg.width, cfg.height)
                   for t in targets},
    )
