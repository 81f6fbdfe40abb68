from dataclasses import dataclass, field
from typing import Dict, Tuple
from enum import Enum

Position = Tuple[float, float]  # (x, y) in meters

class ThreatLevel(Enum):
    """Threat rating, ordered by severity"""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

class TargetAssignment(Enum):
    """Squad responsible for a target"""
    ALPHA = "Alpha"
    BRAVO = "Bravo"
    CHARLIE = "Charlie"
    DELTA = "Delta"
    UNASSIGNED = "Unassigned"  # No squad responsible

# Accepted ranges for imported payloads
IMPORT_DIMENSION_RANGE = (10.0, 200.0)
IMPORT_RADIUS_RANGE = (2.0, 80.0)

# Slider ranges of the interactive editor (advisory, never enforced by the store)
EDIT_DIMENSION_RANGE = (40.0, 140.0)
EDIT_RADIUS_RANGE = (8.0, 60.0)

OVERLAP_FACTOR = 1.3  # Pairs closer than radius * factor contest coverage
TIGHT_CLEARANCE_M = 6.0
PLACEMENT_MARGIN_M = 8.0  # Random placement keeps this far from the edges

@dataclass(frozen=True)
class Target:
    id: str
    label: str
    x: float
    y: float
    threat: ThreatLevel = ThreatLevel.MEDIUM
    assignment: TargetAssignment = TargetAssignment.UNASSIGNED
    last_updated: int = 0  # Epoch milliseconds

    @property
    def pos(self) -> Position:
        return (self.x, self.y)

@dataclass(frozen=True)
class ArenaConfig:
    width: float = 100.0
    height: float = 100.0
    coverage_radius: float = 18.0

@dataclass(frozen=True)
class ArenaState:
    config: ArenaConfig = field(default_factory=ArenaConfig)
    targets: Tuple[Target, ...] = ()

    def find(self, target_id: str):
        """Return the target with this id, or None."""
        for t in self.targets:
            if t.id == target_id:
                return t
        return None

@dataclass
class Event:
    kind: str
    ts_ms: int
    data: Dict

# Reset grid; ids and timestamps are regenerated whenever it is installed
DEFAULT_TARGETS: Tuple[Target, ...] = (
    Target(id="unit-alpha-1", label="Fuel Depot", x=20, y=32,
           threat=ThreatLevel.CRITICAL, assignment=TargetAssignment.ALPHA),
    Target(id="unit-bravo-2", label="Radar Array", x=58, y=16,
           threat=ThreatLevel.HIGH, assignment=TargetAssignment.BRAVO),
    Target(id="unit-charlie-3", label="VIP Escort", x=78, y=68,
           threat=ThreatLevel.MEDIUM, assignment=TargetAssignment.CHARLIE),
    Target(id="unit-delta-4", label="Orbital Relay", x=42, y=82,
           threat=ThreatLevel.LOW, assignment=TargetAssignment.UNASSIGNED),
)
