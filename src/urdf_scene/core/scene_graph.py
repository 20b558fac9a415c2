"""Compiled scene PyTree data structures.

A compiled scene is an arena: links and joints are stored in tuples and refer
to each other through dense integer ids (the link's position in
`SceneGraph.links`). Numeric payloads are JAX arrays; names, kinds and
topology are static metadata.
"""

import enum
from typing import Mapping, Optional, Tuple

from jax import Array
from flax import struct

from ..groups import CollisionGroups
from ..transforms.frame import ResolvedFrame
from .descriptors import Geometry, JointKind, Mesh


@struct.dataclass
class MassProperties:
    """Principal-axis mass properties of one link.

    Attributes:
        mass: Scalar mass.
        local_center_of_mass: (3,) center of mass in the link frame.
        principal_inertia: (3,) non-negative principal moments, ascending.
        principal_inertia_orientation: (4,) unit quaternion (w, x, y, z)
            rotating the link frame onto the principal axes.
    """
    mass: Array
    local_center_of_mass: Array
    principal_inertia: Array
    principal_inertia_orientation: Array


@struct.dataclass
class CompoundShape:
    """Union of primitive sub-shapes, each placed by its own local frame."""
    frames: Tuple[ResolvedFrame, ...]
    primitives: Tuple[Geometry, ...] = struct.field(pytree_node=False)

    def __len__(self) -> int:
        return len(self.primitives)

    @property
    def parts(self) -> Tuple[Tuple[ResolvedFrame, Geometry], ...]:
        return tuple(zip(self.frames, self.primitives))


class DegreeOfFreedom(enum.Enum):
    ROTATION = "rotation"
    TRANSLATION = "translation"


@struct.dataclass
class ConstraintSpec:
    """Concrete constraint between a parent and a child link.

    Attributes:
        kind: Joint kind the constraint was derived from.
        degrees_of_freedom: Motions the constraint leaves free.
        anchor: Resolved joint origin: the child frame relative to the parent.
        parent_anchor: (3,) anchor point in the parent link frame.
        child_anchor: (3,) anchor point in the child link frame.
        basis: (4,) locked relative orientation, or None where the
            constraint leaves rotation free.
        axis: (3,) unit motion axis in the joint frame, or None.
        limited: False for continuous joints, whose rotation has no ends.
    """
    kind: JointKind = struct.field(pytree_node=False)
    degrees_of_freedom: Tuple[DegreeOfFreedom, ...] = struct.field(pytree_node=False)
    anchor: ResolvedFrame
    parent_anchor: Array
    child_anchor: Array
    basis: Optional[Array]
    axis: Optional[Array]
    limited: bool = struct.field(pytree_node=False, default=True)

    @property
    def rotational_dofs(self) -> int:
        return self.degrees_of_freedom.count(DegreeOfFreedom.ROTATION)

    @property
    def translational_dofs(self) -> int:
        return self.degrees_of_freedom.count(DegreeOfFreedom.TRANSLATION)


@struct.dataclass
class CompiledVisual:
    """Visual reference handed through to the presentation side; nothing is loaded."""
    frame: ResolvedFrame
    geometry: Geometry = struct.field(pytree_node=False)
    name: Optional[str] = struct.field(pytree_node=False, default=None)
    material: Optional[str] = struct.field(pytree_node=False, default=None)

    @property
    def mesh_filename(self) -> Optional[str]:
        if isinstance(self.geometry, Mesh):
            return self.geometry.filename
        return None


@struct.dataclass
class CompiledLink:
    """One rigid body of the robot.

    `collider` is None for links without collision primitives and
    `mass_properties` is None for links whose inertia tensor is zero.
    `parent_joint` is the id of the joint that has this link as its child.
    """
    id: int = struct.field(pytree_node=False)
    name: str = struct.field(pytree_node=False)
    collider: Optional[CompoundShape]
    mass_properties: Optional[MassProperties]
    visuals: Tuple[CompiledVisual, ...]
    groups: CollisionGroups = struct.field(pytree_node=False)
    parent: Optional[int] = struct.field(pytree_node=False, default=None)
    parent_joint: Optional[int] = struct.field(pytree_node=False, default=None)
    children: Tuple[int, ...] = struct.field(pytree_node=False, default=())


@struct.dataclass
class CompiledJoint:
    """A joint wired between two compiled links.

    `constraint` is None only for Continuous joints when the physics side
    cannot express unbounded revolute motion.
    """
    id: int = struct.field(pytree_node=False)
    name: str = struct.field(pytree_node=False)
    kind: JointKind = struct.field(pytree_node=False)
    parent: int = struct.field(pytree_node=False)
    child: int = struct.field(pytree_node=False)
    origin: ResolvedFrame
    constraint: Optional[ConstraintSpec]


@struct.dataclass
class EnvironmentBody:
    """A non-robot body: static ground or a free dynamic object."""
    name: str = struct.field(pytree_node=False)
    dynamic: bool = struct.field(pytree_node=False)
    frame: ResolvedFrame
    collider: CompoundShape
    groups: CollisionGroups = struct.field(pytree_node=False)
    restitution: Optional[float] = struct.field(pytree_node=False, default=None)


@struct.dataclass
class SceneGraph:
    """Compiled robot scene.

    Every joint's parent and child ids index into `links`, and the joints
    form a forest whose roots are listed in `roots` in description order.
    `link_ids` and `joint_ids` are read-only name -> id tables built once
    at compile time.

    Attributes:
        gravity: (3,) world gravity vector handed to the physics side.
    """
    name: str = struct.field(pytree_node=False)
    links: Tuple[CompiledLink, ...]
    joints: Tuple[CompiledJoint, ...]
    roots: Tuple[int, ...] = struct.field(pytree_node=False)
    link_ids: Mapping[str, int] = struct.field(pytree_node=False)
    joint_ids: Mapping[str, int] = struct.field(pytree_node=False)
    gravity: Array
    environment: Tuple[EnvironmentBody, ...] = ()

    @property
    def link_names(self) -> Tuple[str, ...]:
        return tuple(link.name for link in self.links)

    def link(self, name: str) -> CompiledLink:
        try:
            return self.links[self.link_ids[name]]
        except KeyError:
            raise KeyError(f"Link '{name}' not found in scene '{self.name}'") from None

    def joint(self, name: str) -> CompiledJoint:
        try:
            return self.joints[self.joint_ids[name]]
        except KeyError:
            raise KeyError(f"Joint '{name}' not found in scene '{self.name}'") from None

    def joint_for_child(self, link_id: int) -> Optional[CompiledJoint]:
        joint_id = self.links[link_id].parent_joint
        if joint_id is None:
            return None
        return self.joints[joint_id]
