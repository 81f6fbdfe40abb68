from dataclasses import dataclass
from enum import Enum
from .model import TIGHT_CLEARANCE_M, Target

class EnvelopeStatus(Enum):
    IN_ENVELOPE = "In Envelope"  # Coverage circle reaches the nearest edge
    TIGHT = "Tight Clearance"
    CLEAR = "Clear"

@dataclass(frozen=True)
class EnvelopeResult:
    border_distance: float
    clearance: float
    status: EnvelopeStatus

def evaluate_envelope(target: Target, coverage_radius: float,
                      arena_width: float, arena_height: float) -> EnvelopeResult:
    """Diagnose how close a target's coverage circle sits to the arena edge.

    Informational only; positions outside the arena yield negative border
    distances and classify as In Envelope.
    """
    border = min(target.x, arena_width - target.x, target.y, arena_height - target.y)
    clearance = max(border - coverage_radius, 0.0)

    if coverage_radius >= border:
        status = EnvelopeStatus.IN_ENVELOPE
    elif clearance < TIGHT_CLEARANCE_M:
        status = EnvelopeStatus.TIGHT
    else:
        status = EnvelopeStatus.CLEAR
    return EnvelopeResult(border_distance=border, clearance=clearance, status=status)
