"""Origin records and the rigid frames they resolve to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import jax
import jax.numpy as jnp
from jax.tree_util import register_pytree_node_class

from . import se3, so3

Array = jax.Array
Vector3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Origin:
    """Position and roll-pitch-yaw orientation as written in a description.

    Units are meters and radians. Values must be finite; readers reject
    anything else before an Origin is built.
    """
    xyz: Vector3 = (0.0, 0.0, 0.0)
    rpy: Vector3 = (0.0, 0.0, 0.0)


@register_pytree_node_class
@dataclass(frozen=True)
class ResolvedFrame:
    """Immutable rigid transform: translation plus unit quaternion (w, x, y, z)."""
    translation: Array  # shape (3,)
    rotation: Array     # shape (4,)

    # Constructors
    @classmethod
    def identity(cls) -> "ResolvedFrame":
        return cls(jnp.zeros(3), jnp.array([1.0, 0.0, 0.0, 0.0]))

    # PyTree boiler-plate
    def tree_flatten(self):
        return (self.translation, self.rotation), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        return cls(*children)

    @property
    def rotation_matrix(self) -> Array:
        return so3.from_quaternion(self.rotation)

    @property
    def matrix(self) -> Array:
        return se3.from_position_and_rotation(self.translation, self.rotation_matrix)


def compose(origin: Origin) -> ResolvedFrame:
    """Resolve an origin into a rigid frame.

    Orientation is R_z(yaw) · R_y(pitch) · R_x(roll). Every origin in the
    scene (collision, visual, inertial, joint) goes through here.

    Args:
        origin: Position and roll-pitch-yaw triple.

    Returns:
        ResolvedFrame: The equivalent translation and unit quaternion.
    """
    rotation = so3.from_rpy(jnp.asarray(origin.rpy, dtype=jnp.float64))
    return ResolvedFrame(
        translation=jnp.asarray(origin.xyz, dtype=jnp.float64),
        rotation=so3.to_quaternion(rotation),
    )
