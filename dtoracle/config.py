"""
Configuration
=============
Global defaults and the per-triangulation settings object.

Exports:
    DEFAULT_DUPLICATE_TOLERANCE (float): distance under which two points are
        the same point. 0.0 means only bit-identical coordinates collide.
    DEFAULT_GRID_SIZE (int): side of the grid the oracle command triangulates.
    TriangulationSettings: knobs of one construction.
"""
from dataclasses import dataclass
from typing import Optional

DEFAULT_DUPLICATE_TOLERANCE: float = 0.0
DEFAULT_GRID_SIZE: int = 3


@dataclass(frozen=True)
class TriangulationSettings:
    duplicate_tolerance: float = DEFAULT_DUPLICATE_TOLERANCE
    # faces the locator may visit before falling back to a full scan; None = number of faces
    max_walk_steps: Optional[int] = None
    # flips one insertion may trigger before the build is declared inconsistent
    max_flips_per_insert: Optional[int] = None
    # run the full DCEL invariant check after every insertion (slow, for debugging)
    check_invariants: bool = False

    def __post_init__(self):
        if not self.duplicate_tolerance >= 0.0:
            raise ValueError(f"duplicate_tolerance must be >= 0, got {self.duplicate_tolerance}")
        if self.max_walk_steps is not None and self.max_walk_steps < 1:
            raise ValueError(f"max_walk_steps must be positive, got {self.max_walk_steps}")
        if self.max_flips_per_insert is not None and self.max_flips_per_insert < 0:
            raise ValueError(f"max_flips_per_insert must be >= 0, got {self.max_flips_per_insert}")
