"""
JAX-based frame math for robot scene compilation.

This module provides pure implementations of:
- SO(3) rotations (so3 module)
- SE(3) rigid body transforms (se3 module)
- Origin resolution into rigid frames (frame module)
"""

from . import so3
from . import se3
from .frame import Origin, ResolvedFrame, compose

__all__ = [
    "so3",
    "se3",
    "Origin",
    "ResolvedFrame",
    "compose",
]
