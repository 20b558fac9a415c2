"""Scene compilation: robot description in, physics-ready scene graph out.

Compilation runs in two passes. Pass 1 compiles every link on its own
(mass properties, compound collider, visuals, collision groups). Pass 2 wires
every joint between two already compiled links. The first error aborts the
whole compilation; no partial scene is ever returned.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Optional, Tuple

import jax.numpy as jnp
from flax.core import FrozenDict

from .colliders import compile_colliders
from .config import CompilerSettings, SceneConfig
from .core.descriptors import LinkDescriptor, RobotDescription
from .core.scene_graph import CompiledJoint, CompiledLink, CompiledVisual, MassProperties, SceneGraph
from .environment import compile_environment
from .groups import ROBOT_BODY
from .inertia import diagonalize, rotate_tensor, tensor_from_entries
from .joints import map_joint
from .transforms.frame import compose
from .tree import JointEdge, SceneSkeleton, build

logger = logging.getLogger(__name__)


def _mass_properties(link: LinkDescriptor, settings: CompilerSettings) -> Optional[MassProperties]:
    inertial = link.inertial
    if inertial is None:
        return None
    frame = compose(inertial.origin)
    tensor = tensor_from_entries(inertial.ixx, inertial.ixy, inertial.ixz,
                                 inertial.iyy, inertial.iyz, inertial.izz)
    return diagonalize(
        rotate_tensor(tensor, frame.rotation_matrix),
        frame.translation,
        inertial.mass,
        name=link.name,
        tolerance=settings.orthonormal_tolerance,
        strict=settings.strict_inertia,
        min_mass=settings.min_mass,
    )


def compile_link(link: LinkDescriptor, link_id: int, skeleton: SceneSkeleton,
                 settings: Optional[CompilerSettings] = None) -> CompiledLink:
    """Pass 1 for one link. Depends on no other link."""
    settings = settings or CompilerSettings()
    visuals = tuple(
        CompiledVisual(frame=compose(v.origin), geometry=v.geometry, name=v.name, material=v.material)
        for v in link.visuals
    )
    compiled = CompiledLink(
        id=link_id,
        name=link.name,
        collider=compile_colliders(link.collisions, owner=link.name),
        mass_properties=_mass_properties(link, settings),
        visuals=visuals,
        groups=ROBOT_BODY,
        parent=skeleton.parents[link_id],
        parent_joint=skeleton.parent_joints[link_id],
        children=skeleton.children[link_id],
    )
    logger.debug("Compiled link '%s' (collider: %s, massive: %s)", link.name,
                 compiled.collider is not None, compiled.mass_properties is not None)
    return compiled


def compile_joint(edge: JointEdge, joint_id: int,
                  settings: Optional[CompilerSettings] = None) -> CompiledJoint:
    """Pass 2 for one joint. Both endpoint links must already be compiled."""
    settings = settings or CompilerSettings()
    joint = edge.descriptor
    origin = compose(joint.origin)
    constraint = map_joint(
        joint.kind,
        joint.axis,
        origin,
        name=joint.name,
        supports_unbounded_revolute=settings.supports_unbounded_revolute,
    )
    return CompiledJoint(
        id=joint_id,
        name=joint.name,
        kind=joint.kind,
        parent=edge.parent,
        child=edge.child,
        origin=origin,
        constraint=constraint,
    )


def _compile_links(description: RobotDescription, skeleton: SceneSkeleton,
                   settings: CompilerSettings) -> Tuple[CompiledLink, ...]:
    def task(link_id: int) -> CompiledLink:
        return compile_link(description.links[link_id], link_id, skeleton, settings)

    link_ids = range(len(description.links))
    if settings.max_workers <= 1:
        return tuple(task(i) for i in link_ids)
    with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
        return tuple(pool.map(task, link_ids))


def compile_scene(description: RobotDescription,
                  config: Optional[SceneConfig] = None,
                  *,
                  with_environment: bool = False) -> SceneGraph:
    """Compile a robot description into a scene graph.

    Args:
        description: Ordered links and joints of the robot.
        config: Settings; defaults are used when omitted.
        with_environment: Also add the field ground and ball bodies.

    Returns:
        SceneGraph: Compiled links (ids match description order), joints
        (ids match description order) and, optionally, environment bodies.

    Raises:
        SceneCompileError: The first structural or numerical error found.
    """
    config = config or SceneConfig()
    settings = config.compiler

    skeleton = build(description.links, description.joints)

    links = _compile_links(description, skeleton, settings)
    joints = tuple(compile_joint(edge, i, settings) for i, edge in enumerate(skeleton.joints))

    joint_ids: Dict[str, int] = {}
    for joint in joints:
        joint_ids.setdefault(joint.name, joint.id)

    environment = ()
    if with_environment:
        environment = compile_environment(config.field_dimensions, config.environment)

    unconstrained = sum(joint.constraint is None for joint in joints)
    logger.info("Compiled robot '%s': %d links, %d joints (%d unconstrained), %d roots",
                description.name, len(links), len(joints), unconstrained, len(skeleton.roots))

    return SceneGraph(
        name=description.name,
        links=links,
        joints=joints,
        roots=skeleton.roots,
        link_ids=FrozenDict(skeleton.link_ids),
        joint_ids=FrozenDict(joint_ids),
        gravity=jnp.asarray(config.environment.gravity, dtype=jnp.float64),
        environment=environment,
    )
