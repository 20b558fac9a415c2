"""Tests for compound collider compilation."""

import jax.numpy as jnp
import numpy as np
import pytest

from urdf_scene.colliders import compile_colliders
from urdf_scene.core import Box, Capsule, CollisionPrimitive, Cylinder, Mesh, Sphere
from urdf_scene.errors import UnsupportedGeometry
from urdf_scene.transforms import Origin


def test_no_primitives_means_no_collider():
    assert compile_colliders((), owner="sensor") is None


def test_single_primitive_is_still_compound():
    shape = compile_colliders((CollisionPrimitive(Sphere(0.1)),), owner="ball")
    assert len(shape) == 1
    frame, primitive = shape.parts[0]
    assert primitive == Sphere(0.1)
    np.testing.assert_allclose(frame.matrix, jnp.eye(4), atol=1e-12)


def test_every_primitive_kind_keeps_order_and_frame():
    primitives = (
        CollisionPrimitive(Box((0.1, 0.2, 0.3)), Origin(xyz=(1.0, 0.0, 0.0))),
        CollisionPrimitive(Cylinder(radius=0.05, half_length=0.2), Origin(xyz=(0.0, 1.0, 0.0))),
        CollisionPrimitive(Sphere(0.4), Origin(xyz=(0.0, 0.0, 1.0))),
        CollisionPrimitive(Capsule(radius=0.02, half_length=0.1),
                           Origin(xyz=(0.5, 0.5, 0.5), rpy=(0.0, np.pi / 2, 0.0))),
    )
    shape = compile_colliders(primitives, owner="multi")

    assert len(shape) == len(primitives)
    assert shape.primitives == tuple(p.geometry for p in primitives)
    for frame, primitive in zip(shape.frames, primitives):
        np.testing.assert_allclose(frame.translation, jnp.array(primitive.origin.xyz))

    # Capsule axis (local Z) pitched onto the parent's X axis
    capsule_frame = shape.frames[3]
    np.testing.assert_allclose(capsule_frame.rotation_matrix @ jnp.array([0.0, 0.0, 1.0]),
                               jnp.array([1.0, 0.0, 0.0]), atol=1e-12)


def test_mesh_collision_is_unsupported():
    primitives = (
        CollisionPrimitive(Box((0.1, 0.1, 0.1))),
        CollisionPrimitive(Mesh("package://robot/meshes/foot.stl")),
    )
    with pytest.raises(UnsupportedGeometry) as excinfo:
        compile_colliders(primitives, owner="l_foot")
    assert excinfo.value.owner_name == "l_foot"
    assert excinfo.value.geometry_kind == "mesh"


def test_unknown_geometry_is_unsupported():
    with pytest.raises(UnsupportedGeometry, match="str"):
        compile_colliders((CollisionPrimitive("cone"),), owner="odd")
