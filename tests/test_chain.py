"""Tests for rest-pose world frames."""

from pathlib import Path

import jax.numpy as jnp
import numpy as np

from urdf_scene import compile_scene, load_urdf
from urdf_scene.chain import rest_poses, rest_poses_world
from urdf_scene.core import JointDescriptor, JointKind, LinkDescriptor, RobotDescription
from urdf_scene.transforms import Origin, se3

FIXTURE = Path(__file__).parent / "fixtures" / "mini_bot.urdf"


def test_rest_poses_mini_bot():
    scene = compile_scene(load_urdf(str(FIXTURE)))
    poses = rest_poses(scene)

    assert set(poses) == set(scene.link_names)
    expected_positions = {
        "base_link": [0.0, 0.0, 0.0],
        "torso": [0.0, 0.0, 0.1],
        "head": [0.0, 0.0, 0.4],
        "upper_arm": [0.0, 0.15, 0.35],
        "slider": [0.2, 0.15, 0.35],
        "gripper": [0.25, 0.15, 0.35],
        "camera_mount": [0.05, 0.0, 0.45],
    }
    for name, position in expected_positions.items():
        T = poses[name]
        np.testing.assert_allclose(se3.get_position(T), jnp.array(position), atol=1e-12)
        np.testing.assert_allclose(T[3, :], jnp.array([0.0, 0.0, 0.0, 1.0]))
        R = se3.get_rotation(T)
        np.testing.assert_allclose(R @ R.T, jnp.eye(3), atol=1e-12)

    np.testing.assert_allclose(poses["base_link"], jnp.eye(4), atol=1e-12)
    # Shoulder rolls the arm a quarter turn: arm Z points along world -Y
    arm_z = se3.get_rotation(poses["upper_arm"]) @ jnp.array([0.0, 0.0, 1.0])
    np.testing.assert_allclose(arm_z, jnp.array([0.0, -1.0, 0.0]), atol=1e-12)


def test_rest_poses_forest():
    description = RobotDescription(
        name="two_trees",
        links=(LinkDescriptor("leaf"), LinkDescriptor("root_a"), LinkDescriptor("root_b")),
        joints=(JointDescriptor("j", JointKind.FIXED, "root_a", "leaf",
                                origin=Origin(xyz=(1.0, 0.0, 0.0))),),
    )
    world = rest_poses_world(compile_scene(description))

    assert world.shape == (3, 4, 4)
    np.testing.assert_allclose(se3.get_position(world[0]), jnp.array([1.0, 0.0, 0.0]))
    np.testing.assert_allclose(world[1], jnp.eye(4))
    np.testing.assert_allclose(world[2], jnp.eye(4))
