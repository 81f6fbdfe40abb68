import math
from .model import Position

def distance_2d(pos1: Position, pos2: Position) -> float:
    """Calculate Euclidean distance between two 2D positions."""
    dx = pos2[0] - pos1[0]
    dy = pos2[1] - pos1[1]
    return math.sqrt(dx * dx + dy * dy)

def distance_to_center(pos: Position, width: float, height: float) -> float:
    """Distance from a position to the arena center."""
    return distance_2d(pos, (width / 2, height / 2))

def clamp(value: float, lo: float, hi: float) -> float:
    # hi wins when the range is inverted
    return min(max(value, lo), hi)
