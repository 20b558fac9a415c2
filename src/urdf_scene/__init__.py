"""
URDF Scene: compile robot descriptions into physics-ready scene graphs.

This library resolves a robot's links and joints into a kinematic forest,
diagonalizes link inertia, builds compound colliders and maps joint kinds to
constraint specifications, producing immutable JAX PyTrees.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from . import io
from .compiler import compile_scene
from .config import SceneConfig, load_config
from .io import load_urdf, parse_urdf

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "io",
    "compile_scene",
    "SceneConfig",
    "load_config",
    "load_urdf",
    "parse_urdf",
]
