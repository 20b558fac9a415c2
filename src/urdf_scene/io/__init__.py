"""I/O utilities for reading robot descriptions.

This module parses URDF documents into the ordered descriptor records the
scene compiler consumes.
"""

from .urdf_parser import load_urdf, parse_urdf

__all__ = ["load_urdf", "parse_urdf"]
