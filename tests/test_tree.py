"""Tests for kinematic tree construction."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from urdf_scene.core import JointDescriptor, JointKind, LinkDescriptor
from urdf_scene.errors import CyclicKinematics, DuplicateLink, MultipleParents, UnknownLinkReference
from urdf_scene.tree import build


def _links(*names):
    return [LinkDescriptor(name) for name in names]


def _joint(name, parent, child):
    return JointDescriptor(name, JointKind.FIXED, parent, child)


def test_chain():
    skeleton = build(_links("base", "upper", "lower"),
                     [_joint("j1", "base", "upper"), _joint("j2", "upper", "lower")])

    assert skeleton.link_names == ("base", "upper", "lower")
    assert dict(skeleton.link_ids) == {"base": 0, "upper": 1, "lower": 2}
    assert skeleton.roots == (0,)
    assert skeleton.parents == (None, 0, 1)
    assert skeleton.parent_joints == (None, 0, 1)
    assert skeleton.children == ((1,), (2,), ())
    assert skeleton.order() == (0, 1, 2)
    assert [(e.name, e.parent, e.child) for e in skeleton.joints] == [("j1", 0, 1), ("j2", 1, 2)]


def test_joints_may_precede_their_links_order():
    """Joint order is independent of link order."""
    skeleton = build(_links("hand", "arm", "body"),
                     [_joint("wrist", "arm", "hand"), _joint("shoulder", "body", "arm")])
    assert skeleton.roots == (2,)
    assert skeleton.order() == (2, 1, 0)


def test_roots_follow_description_order():
    skeleton = build(_links("zeta", "alpha", "mid"), [_joint("j", "zeta", "mid")])
    assert [skeleton.link_names[i] for i in skeleton.roots] == ["zeta", "alpha"]
    assert len(skeleton.order()) == 3


def test_isolated_links_are_roots():
    skeleton = build(_links("a", "b"), [])
    assert skeleton.roots == (0, 1)


@pytest.mark.parametrize("names", [
    ("dup", "dup", "a", "b"),
    ("a", "dup", "b", "dup"),
    ("a", "b", "dup", "dup"),
])
def test_duplicate_link(names):
    with pytest.raises(DuplicateLink) as excinfo:
        build(_links(*names), [])
    assert excinfo.value.link_name == "dup"


@pytest.mark.parametrize("parent,child,missing", [
    ("ghost", "a", "ghost"),
    ("a", "ghost", "ghost"),
])
def test_unknown_link_reference(parent, child, missing):
    with pytest.raises(UnknownLinkReference) as excinfo:
        build(_links("a", "b"), [_joint("ok", "a", "b"), _joint("broken", parent, child)])
    assert excinfo.value.joint_name == "broken"
    assert excinfo.value.link_name == missing


def test_multiple_parents():
    with pytest.raises(MultipleParents) as excinfo:
        build(_links("a", "b", "c"), [_joint("j1", "a", "c"), _joint("j2", "b", "c")])
    assert excinfo.value.link_name == "c"
    assert excinfo.value.joint_names == ("j1", "j2")


def test_three_link_cycle():
    with pytest.raises(CyclicKinematics) as excinfo:
        build(_links("A", "B", "C"),
              [_joint("ab", "A", "B"), _joint("bc", "B", "C"), _joint("ca", "C", "A")])
    assert set(excinfo.value.link_names) == {"A", "B", "C"}


def test_self_loop():
    with pytest.raises(CyclicKinematics):
        build(_links("A"), [_joint("aa", "A", "A")])


def test_cycle_next_to_valid_tree():
    with pytest.raises(CyclicKinematics) as excinfo:
        build(_links("root", "leaf", "C", "D"),
              [_joint("j", "root", "leaf"), _joint("cd", "C", "D"), _joint("dc", "D", "C")])
    assert "root" not in excinfo.value.link_names


@given(st.data())
@settings(deadline=None, max_examples=50)
def test_random_forest_covers_every_link(data):
    num_links = data.draw(st.integers(min_value=1, max_value=12))
    parents = [None] + [
        data.draw(st.one_of(st.none(), st.integers(min_value=0, max_value=i - 1)))
        for i in range(1, num_links)
    ]
    link_order = data.draw(st.permutations(range(num_links)))
    joints = [_joint(f"joint_{i}", f"link_{p}", f"link_{i}")
              for i, p in enumerate(parents) if p is not None]
    joints = data.draw(st.permutations(joints))

    skeleton = build(_links(*(f"link_{i}" for i in link_order)), joints)

    assert len(skeleton) == num_links
    assert sorted(skeleton.order()) == list(range(num_links))
    expected_roots = [f"link_{i}" for i in link_order if parents[i] is None]
    assert [skeleton.link_names[i] for i in skeleton.roots] == expected_roots
