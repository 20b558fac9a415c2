"""Mapping from joint kinds to constraint specifications.

| kind       | free motion                   | axis     |
|------------|-------------------------------|----------|
| fixed      | none                          | -        |
| revolute   | 1 rotation about axis         | required |
| continuous | 1 rotation about axis, no ends| required |
| prismatic  | 1 translation along axis      | required |
| spherical  | 3 rotations about the anchor  | -        |
| planar     | unsupported                   |          |
| floating   | unsupported                   |          |

Continuous joints need an engine that can express unbounded revolute motion.
When it cannot, no constraint is produced and the child body is left
physically unconnected to its parent.
"""

import logging
from typing import Optional, Sequence

import jax.numpy as jnp

from .core.descriptors import JointKind
from .core.scene_graph import ConstraintSpec, DegreeOfFreedom
from .errors import MissingAxis, UnsupportedJointKind
from .transforms.frame import ResolvedFrame

logger = logging.getLogger(__name__)

_ROTATION = DegreeOfFreedom.ROTATION
_TRANSLATION = DegreeOfFreedom.TRANSLATION

_FREE_MOTION = {
    JointKind.FIXED: (),
    JointKind.REVOLUTE: (_ROTATION,),
    JointKind.CONTINUOUS: (_ROTATION,),
    JointKind.PRISMATIC: (_TRANSLATION,),
    JointKind.SPHERICAL: (_ROTATION, _ROTATION, _ROTATION),
}

_AXIS_KINDS = (JointKind.REVOLUTE, JointKind.CONTINUOUS, JointKind.PRISMATIC)


def _unit_axis(axis: Optional[Sequence[float]], name: str):
    if axis is None:
        raise MissingAxis(name)
    axis = jnp.asarray(axis, dtype=jnp.float64)
    norm = float(jnp.linalg.norm(axis))
    if axis.shape != (3,) or not norm > 1e-12:
        raise MissingAxis(name)
    return axis / norm


def map_joint(
    kind: JointKind,
    axis: Optional[Sequence[float]],
    anchor: ResolvedFrame,
    *,
    name: str = "<unnamed>",
    supports_unbounded_revolute: bool = True,
) -> Optional[ConstraintSpec]:
    """Build the constraint a joint kind implies.

    Args:
        kind: Joint kind.
        axis: Motion axis in the joint frame; required for revolute,
            continuous and prismatic joints, ignored otherwise.
        anchor: Resolved joint origin, i.e. the child frame relative to the
            parent frame.
        name: Joint name used in errors and log messages.
        supports_unbounded_revolute: Whether continuous joints can be
            expressed as constraints.

    Returns:
        ConstraintSpec, or None for a continuous joint that cannot be expressed.

    Raises:
        UnsupportedJointKind: For planar and floating joints.
        MissingAxis: When an axis-requiring kind has no usable axis.
    """
    if kind not in _FREE_MOTION:
        raise UnsupportedJointKind(name, kind.value)

    unit_axis = _unit_axis(axis, name) if kind in _AXIS_KINDS else None

    if kind is JointKind.CONTINUOUS and not supports_unbounded_revolute:
        logger.warning("Joint '%s' is continuous and will not be constrained; "
                       "its child moves freely", name)
        return None

    # The child frame sits at the joint origin, so its anchor is the child origin.
    return ConstraintSpec(
        kind=kind,
        degrees_of_freedom=_FREE_MOTION[kind],
        anchor=anchor,
        parent_anchor=anchor.translation,
        child_anchor=jnp.zeros(3, dtype=jnp.float64),
        basis=None if kind is JointKind.SPHERICAL else anchor.rotation,
        axis=unit_axis,
        limited=kind is not JointKind.CONTINUOUS,
    )
