"""Tests for URDF parser functionality."""

from pathlib import Path

import pytest

from urdf_scene.core import Box, Capsule, Cylinder, JointKind, Mesh, RobotDescription, Sphere
from urdf_scene.errors import UrdfParseError
from urdf_scene.io import load_urdf, parse_urdf

FIXTURE = Path(__file__).parent / "fixtures" / "mini_bot.urdf"


def _robot(body: str) -> str:
    return f'<robot name="t">{body}</robot>'


def test_load_mini_bot():
    robot = load_urdf(str(FIXTURE))

    assert isinstance(robot, RobotDescription)
    assert robot.name == "mini_bot"
    assert [link.name for link in robot.links] == [
        "base_link", "torso", "head", "upper_arm", "slider", "gripper", "camera_mount",
    ]
    assert [(j.name, j.kind) for j in robot.joints] == [
        ("torso_joint", JointKind.FIXED),
        ("neck", JointKind.CONTINUOUS),
        ("shoulder", JointKind.REVOLUTE),
        ("rail", JointKind.PRISMATIC),
        ("wrist", JointKind.FIXED),
        ("camera_ball", JointKind.SPHERICAL),
    ]


def test_geometry_is_converted_to_half_sizes():
    robot = load_urdf(str(FIXTURE))
    links = {link.name: link for link in robot.links}

    base = links["base_link"]
    assert [c.name for c in base.collisions] == ["base_box", "base_post"]
    assert base.collisions[0].geometry == Box((0.1, 0.15, 0.05))
    assert base.collisions[1].geometry == Cylinder(radius=0.02, half_length=0.05)
    assert base.collisions[1].origin.rpy == pytest.approx((1.5707963267948966, 0.0, 0.0))

    assert links["torso"].collisions[0].geometry == Capsule(radius=0.05, half_length=0.1)
    assert links["head"].collisions[0].geometry == Sphere(0.06)


def test_visuals_pass_through_mesh_references():
    robot = load_urdf(str(FIXTURE))
    links = {link.name: link for link in robot.links}

    visual = links["base_link"].visuals[0]
    assert visual.geometry == Mesh("package://mini_bot/meshes/base.dae", (0.001, 0.001, 0.001))
    assert visual.material == "grey"
    assert links["gripper"].visuals[0].geometry.scale == (1.0, 1.0, 1.0)
    assert links["gripper"].collisions == ()


def test_inertial_record():
    robot = load_urdf(str(FIXTURE))
    links = {link.name: link for link in robot.links}

    torso = links["torso"].inertial
    assert torso.mass == 1.5
    assert torso.center_of_mass == (0.0, 0.0, 0.1)
    assert torso.origin.rpy[2] == pytest.approx(0.7853981633974483)
    assert (torso.ixx, torso.iyy, torso.izz) == (0.01, 0.02, 0.025)
    assert links["upper_arm"].inertial.ixy == 0.005
    assert links["gripper"].inertial is None
    assert links["camera_mount"].inertial is None


def test_joint_axes_and_origins():
    robot = load_urdf(str(FIXTURE))
    joints = {joint.name: joint for joint in robot.joints}

    assert joints["neck"].axis == (0.0, 0.0, 1.0)
    assert joints["rail"].axis == (1.0, 0.0, 0.0)
    assert joints["camera_ball"].axis is None
    assert joints["shoulder"].origin.xyz == (0.0, 0.15, 0.25)
    assert joints["wrist"].origin.rpy == (0.0, 0.0, 0.0)
    assert (joints["rail"].parent, joints["rail"].child) == ("upper_arm", "slider")


def test_missing_origin_is_identity():
    robot = parse_urdf(_robot(
        '<link name="a"/><link name="b"/>'
        '<joint name="j" type="fixed"><parent link="a"/><child link="b"/></joint>'
    ))
    assert robot.joints[0].origin.xyz == (0.0, 0.0, 0.0)
    assert robot.joints[0].origin.rpy == (0.0, 0.0, 0.0)


def test_planar_and_floating_are_read():
    """Unsupported kinds are rejected at compile time, not while reading."""
    robot = parse_urdf(_robot(
        '<link name="a"/><link name="b"/><link name="c"/>'
        '<joint name="p" type="planar"><parent link="a"/><child link="b"/></joint>'
        '<joint name="f" type="floating"><parent link="a"/><child link="c"/></joint>'
    ))
    assert [j.kind for j in robot.joints] == [JointKind.PLANAR, JointKind.FLOATING]


@pytest.mark.parametrize("document,message", [
    ('<robot name="t"><link/></robot>', "without a name"),
    (_robot('<link name="a"/><joint name="j" type="hinge"><parent link="a"/><child link="a"/></joint>'),
     "unknown joint type"),
    (_robot('<link name="a"/><joint name="j" type="fixed"><child link="a"/></joint>'),
     "missing <parent>"),
    (_robot('<link name="a"><collision><geometry><box size="1 2"/></geometry></collision></link>'),
     "expected 3 values"),
    (_robot('<link name="a"><collision><geometry><sphere radius="abc"/></geometry></collision></link>'),
     "expected numbers"),
    (_robot('<link name="a"><collision><origin xyz="0 nan 0"/>'
            '<geometry><sphere radius="1"/></geometry></collision></link>'),
     "non-finite"),
    (_robot('<link name="a"><collision><geometry/></collision></link>'), "missing geometry"),
    (_robot('<link name="a"><visual><geometry><cone radius="1"/></geometry></visual></link>'),
     "unknown geometry"),
    ('<model name="t"/>', "Expected <robot>"),
    ('<robot name="t">', "Malformed URDF"),
])
def test_parse_errors(document, message):
    with pytest.raises(UrdfParseError, match=message):
        parse_urdf(document)


def test_missing_file():
    with pytest.raises(UrdfParseError, match="Could not read URDF"):
        load_urdf("/nonexistent/robot.urdf")
