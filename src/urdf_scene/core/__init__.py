"""Core data structures for robot scene compilation.

Descriptors are the plain, ordered input records; scene-graph records are the
immutable JAX PyTrees produced by the compiler.
"""

from .descriptors import (
    Box,
    Capsule,
    CollisionPrimitive,
    Cylinder,
    Geometry,
    Inertial,
    JointDescriptor,
    JointKind,
    LinkDescriptor,
    Mesh,
    RobotDescription,
    Sphere,
    VisualPrimitive,
)
from .scene_graph import (
    CompiledJoint,
    CompiledLink,
    CompiledVisual,
    CompoundShape,
    ConstraintSpec,
    DegreeOfFreedom,
    EnvironmentBody,
    MassProperties,
    SceneGraph,
)

__all__ = [
    "Box",
    "Capsule",
    "CollisionPrimitive",
    "Cylinder",
    "Geometry",
    "Inertial",
    "JointDescriptor",
    "JointKind",
    "LinkDescriptor",
    "Mesh",
    "RobotDescription",
    "Sphere",
    "VisualPrimitive",
    "CompiledJoint",
    "CompiledLink",
    "CompiledVisual",
    "CompoundShape",
    "ConstraintSpec",
    "DegreeOfFreedom",
    "EnvironmentBody",
    "MassProperties",
    "SceneGraph",
]
