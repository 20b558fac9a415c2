"""URDF reader producing robot descriptions.

This module turns a URDF document into the ordered link and joint
descriptors the scene compiler consumes. It only checks what it needs to
build those records (well-formed numbers, known joint types, present
parent/child elements); graph-level validation happens at compile time.
"""

import logging
import math
from typing import Optional, Tuple, Union

from lxml import etree

from ..core.descriptors import (
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
from ..errors import UrdfParseError
from ..transforms.frame import Origin

logger = logging.getLogger(__name__)


def load_urdf(urdf_path: str) -> RobotDescription:
    """Load a URDF file and convert it to a RobotDescription.

    Args:
        urdf_path: Path to the URDF file to load.

    Returns:
        RobotDescription: Links and joints in document order.
    """
    try:
        tree = etree.parse(str(urdf_path))
    except (OSError, etree.XMLSyntaxError) as e:
        raise UrdfParseError(f"Could not read URDF '{urdf_path}': {e}") from e
    robot = _parse_robot(tree.getroot())
    logger.info("Loaded URDF '%s': %d links, %d joints",
                urdf_path, len(robot.links), len(robot.joints))
    return robot


def parse_urdf(document: Union[str, bytes]) -> RobotDescription:
    """Parse a URDF document held in memory."""
    if isinstance(document, str):
        document = document.encode("utf-8")
    try:
        root = etree.fromstring(document)
    except etree.XMLSyntaxError as e:
        raise UrdfParseError(f"Malformed URDF: {e}") from e
    return _parse_robot(root)


def _parse_robot(root) -> RobotDescription:
    if root.tag != "robot":
        raise UrdfParseError(f"Expected <robot> root element, found <{root.tag}>")

    links = tuple(_parse_link(link) for link in root.findall("link"))
    joints = tuple(_parse_joint(joint) for joint in root.findall("joint"))

    return RobotDescription(name=root.get("name", ""), links=links, joints=joints)


def _floats(text: Optional[str], count: int, context: str) -> Tuple[float, ...]:
    """Parse exactly `count` finite, whitespace separated numbers."""
    try:
        values = tuple(float(x) for x in (text or "").split())
    except ValueError as e:
        raise UrdfParseError(f"{context}: expected numbers, got '{text}'") from e
    if len(values) != count:
        raise UrdfParseError(f"{context}: expected {count} values, got '{text}'")
    if not all(math.isfinite(v) for v in values):
        raise UrdfParseError(f"{context}: non-finite value in '{text}'")
    return values


def _float_attr(elem, attr: str, context: str) -> float:
    value = elem.get(attr)
    if value is None:
        raise UrdfParseError(f"{context}: missing attribute '{attr}'")
    return _floats(value, 1, f"{context} {attr}")[0]


def _parse_origin(parent, context: str) -> Origin:
    origin_elem = parent.find("origin")
    if origin_elem is None:
        return Origin()
    return Origin(
        xyz=_floats(origin_elem.get("xyz", "0 0 0"), 3, f"{context} origin xyz"),
        rpy=_floats(origin_elem.get("rpy", "0 0 0"), 3, f"{context} origin rpy"),
    )


def _parse_geometry(parent, context: str) -> Geometry:
    geometry_elem = parent.find("geometry")
    # Skip comments and processing instructions
    shapes = [] if geometry_elem is None else [c for c in geometry_elem if isinstance(c.tag, str)]
    if not shapes:
        raise UrdfParseError(f"{context}: missing geometry")

    shape = shapes[0]
    if shape.tag == "box":
        size = _floats(shape.get("size"), 3, f"{context} box size")
        return Box(half_extents=tuple(s / 2.0 for s in size))
    if shape.tag == "cylinder":
        return Cylinder(radius=_float_attr(shape, "radius", context),
                        half_length=_float_attr(shape, "length", context) / 2.0)
    if shape.tag == "sphere":
        return Sphere(radius=_float_attr(shape, "radius", context))
    if shape.tag == "capsule":
        return Capsule(radius=_float_attr(shape, "radius", context),
                       half_length=_float_attr(shape, "length", context) / 2.0)
    if shape.tag == "mesh":
        filename = shape.get("filename")
        if not filename:
            raise UrdfParseError(f"{context}: mesh without filename")
        scale = shape.get("scale")
        return Mesh(filename=filename,
                    scale=_floats(scale, 3, f"{context} mesh scale") if scale else (1.0, 1.0, 1.0))
    raise UrdfParseError(f"{context}: unknown geometry <{shape.tag}>")


def _parse_inertial(link_elem, context: str) -> Optional[Inertial]:
    inertial_elem = link_elem.find("inertial")
    if inertial_elem is None:
        return None

    mass_elem = inertial_elem.find("mass")
    mass = _float_attr(mass_elem, "value", f"{context} mass") if mass_elem is not None else 0.0

    inertia = {}
    inertia_elem = inertial_elem.find("inertia")
    for key in ("ixx", "ixy", "ixz", "iyy", "iyz", "izz"):
        if inertia_elem is not None and inertia_elem.get(key) is not None:
            inertia[key] = _float_attr(inertia_elem, key, f"{context} inertia")

    return Inertial(mass=mass, origin=_parse_origin(inertial_elem, f"{context} inertial"), **inertia)


def _parse_link(link_elem) -> LinkDescriptor:
    name = link_elem.get("name")
    if not name:
        raise UrdfParseError("<link> without a name")
    context = f"link '{name}'"

    collisions = tuple(
        CollisionPrimitive(
            geometry=_parse_geometry(elem, f"{context} collision"),
            origin=_parse_origin(elem, f"{context} collision"),
            name=elem.get("name"),
        )
        for elem in link_elem.findall("collision")
    )

    visuals = []
    for elem in link_elem.findall("visual"):
        material_elem = elem.find("material")
        visuals.append(VisualPrimitive(
            geometry=_parse_geometry(elem, f"{context} visual"),
            origin=_parse_origin(elem, f"{context} visual"),
            name=elem.get("name"),
            material=material_elem.get("name") if material_elem is not None else None,
        ))

    return LinkDescriptor(
        name=name,
        inertial=_parse_inertial(link_elem, context),
        collisions=collisions,
        visuals=tuple(visuals),
    )


def _parse_joint(joint_elem) -> JointDescriptor:
    name = joint_elem.get("name")
    if not name:
        raise UrdfParseError("<joint> without a name")
    context = f"joint '{name}'"

    joint_type = joint_elem.get("type")
    try:
        kind = JointKind(joint_type)
    except ValueError as e:
        raise UrdfParseError(f"{context}: unknown joint type '{joint_type}'") from e

    parent_elem = joint_elem.find("parent")
    child_elem = joint_elem.find("child")
    if parent_elem is None or child_elem is None:
        raise UrdfParseError(f"{context}: missing <parent> or <child>")

    axis_elem = joint_elem.find("axis")
    axis = None
    if axis_elem is not None:
        axis = _floats(axis_elem.get("xyz", "1 0 0"), 3, f"{context} axis")

    return JointDescriptor(
        name=name,
        kind=kind,
        parent=parent_elem.get("link", ""),
        child=child_elem.get("link", ""),
        origin=_parse_origin(joint_elem, context),
        axis=axis,
    )
