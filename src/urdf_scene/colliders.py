"""Compound collider compilation for a single link."""

import logging
from typing import Optional, Sequence

from .core.descriptors import Box, Capsule, CollisionPrimitive, Cylinder, Mesh, Sphere, geometry_kind
from .core.scene_graph import CompoundShape
from .errors import UnsupportedGeometry
from .transforms.frame import compose

logger = logging.getLogger(__name__)


def compile_colliders(primitives: Sequence[CollisionPrimitive],
                      owner: str = "<unnamed>") -> Optional[CompoundShape]:
    """Compile a link's collision primitives into one compound shape.

    Args:
        primitives: Ordered collision primitives of the link.
        owner: Link name used in errors.

    Returns:
        CompoundShape with one sub-shape per primitive in input order, or
        None when the link has no collision primitives.

    Raises:
        UnsupportedGeometry: For mesh primitives (meshes are visual-only).
    """
    if not primitives:
        return None

    frames = []
    shapes = []
    for primitive in primitives:
        geometry = primitive.geometry
        if isinstance(geometry, (Box, Cylinder, Sphere, Capsule)):
            shapes.append(geometry)
        elif isinstance(geometry, Mesh):
            raise UnsupportedGeometry(owner, "mesh")
        else:
            raise UnsupportedGeometry(owner, geometry_kind(geometry))
        frames.append(compose(primitive.origin))

    logger.debug("Link '%s': compound collider with %d sub-shapes", owner, len(shapes))
    return CompoundShape(frames=tuple(frames), primitives=tuple(shapes))
