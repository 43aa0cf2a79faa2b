# MIT License (see LICENSE)
"""
Numerical constants shared by the chain model and the session layer.
"""
from __future__ import annotations

# Fixed number of integrator substeps per tick. Never adapted at runtime:
# a longer tick window means proportionally larger substeps, not more of them.
DEFAULT_SUBSTEPS: int = 1024

# Gravity used by the default simulation session, in m/s².
# The vector points "up"; masses accelerate along its negation.
DEFAULT_GRAVITY: tuple[float, float, float] = (0.0, 9.8, 0.0)

# Angle (degrees) between consecutive rods of the initial zig-zag layout
# and the downward direction.
DEFAULT_ZIGZAG_DEG: float = 30.0
