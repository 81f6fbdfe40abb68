from typing import Tuple
import numpy as np

class DRNG:
    """Seeded generator for target placement, so sessions are reproducible."""

    def __init__(self, seed: int):
        self.g = np.random.Generator(np.random.PCG64(seed))

    def uniform(self, a: float, b: float) -> float:
        """Return a random float in [a, b)."""
        return float(self.g.uniform(a, b))

    def point(self, width: float, height: float) -> Tuple[float, float]:
        """Random (x, y) inside a width x height rectangle anchored at the origin."""
        return self.uniform(0.0, width), self.uniform(0.0, height)
