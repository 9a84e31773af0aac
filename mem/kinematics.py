"""
Kinematics helpers for the MEM modules.

Units: GeV (natural units c = 1).
"""

from __future__ import annotations
import math
from dataclasses import dataclass
import numpy as np


# -----------------------------
# FourVector
# -----------------------------
@dataclass(frozen=True)
class FourVector:
    E: float
    px: float
    py: float
    pz: float

    @classmethod
    def from_spherical(cls, E: float, p: float, theta: float, phi: float) -> "FourVector":
        """Build a FourVector from energy, |p|, polar angle and azimuthal angle."""
        return cls(
            E,
            p * math.sin(theta) * math.cos(phi),
            p * math.sin(theta) * math.sin(phi),
            p * math.cos(theta),
        )

    @property
    def p(self) -> np.ndarray:
        return np.array([self.px, self.py, self.pz], dtype=float)

    @property
    def magnitude(self) -> float:
        return float(np.linalg.norm(self.p))

    @property
    def pt(self) -> float:
        return math.hypot(self.px, self.py)

    @property
    def phi(self) -> float:
        # atan2(0, 0) == 0, so a vector along z gets phi = 0
        return math.atan2(self.py, self.px)

    @property
    def theta(self) -> float:
        return math.atan2(self.pt, self.pz)

    def __repr__(self) -> str:
        return f"FourVector(E={self.E:.6f}, px={self.px:.6f}, py={self.py:.6f}, pz={self.pz:.6f})"
