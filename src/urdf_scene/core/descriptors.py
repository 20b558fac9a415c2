"""Input records describing a robot before compilation.

These mirror what a URDF file states: named links with inertial, collision
and visual data, and named joints referring to links by name. Nothing here is
validated beyond shape; the tree builder and compiler do the checking.
"""

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..transforms.frame import Origin, Vector3


class JointKind(enum.Enum):
    """Joint types, valued by their URDF spelling."""
    FIXED = "fixed"
    REVOLUTE = "revolute"
    CONTINUOUS = "continuous"
    PRISMATIC = "prismatic"
    SPHERICAL = "spherical"
    PLANAR = "planar"
    FLOATING = "floating"


# Geometry variants
@dataclass(frozen=True)
class Box:
    half_extents: Vector3


@dataclass(frozen=True)
class Cylinder:
    """Cylinder along the local Z axis."""
    radius: float
    half_length: float


@dataclass(frozen=True)
class Sphere:
    radius: float


@dataclass(frozen=True)
class Capsule:
    """Capsule along the local Z axis; half_length excludes the end caps."""
    radius: float
    half_length: float


@dataclass(frozen=True)
class Mesh:
    """Reference to a mesh asset. Usable for visuals only."""
    filename: str
    scale: Vector3 = (1.0, 1.0, 1.0)


Geometry = Union[Box, Cylinder, Sphere, Capsule, Mesh]


def geometry_kind(geometry: Geometry) -> str:
    return type(geometry).__name__.lower()


@dataclass(frozen=True)
class Inertial:
    """Mass, center-of-mass frame and the six independent inertia entries.

    The tensor entries are expressed in the frame given by `origin`; its
    translation is the center of mass in the link frame.
    """
    mass: float
    origin: Origin = field(default_factory=Origin)
    ixx: float = 0.0
    ixy: float = 0.0
    ixz: float = 0.0
    iyy: float = 0.0
    iyz: float = 0.0
    izz: float = 0.0

    @property
    def center_of_mass(self) -> Vector3:
        return self.origin.xyz


@dataclass(frozen=True)
class CollisionPrimitive:
    geometry: Geometry
    origin: Origin = field(default_factory=Origin)
    name: Optional[str] = None


@dataclass(frozen=True)
class VisualPrimitive:
    geometry: Geometry
    origin: Origin = field(default_factory=Origin)
    name: Optional[str] = None
    material: Optional[str] = None


@dataclass(frozen=True)
class LinkDescriptor:
    name: str
    inertial: Optional[Inertial] = None
    collisions: Tuple[CollisionPrimitive, ...] = ()
    visuals: Tuple[VisualPrimitive, ...] = ()


@dataclass(frozen=True)
class JointDescriptor:
    name: str
    kind: JointKind
    parent: str
    child: str
    origin: Origin = field(default_factory=Origin)
    axis: Optional[Vector3] = None


@dataclass(frozen=True)
class RobotDescription:
    """Ordered links and joints of one robot."""
    name: str
    links: Tuple[LinkDescriptor, ...]
    joints: Tuple[JointDescriptor, ...] = ()
