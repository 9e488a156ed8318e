"""Tests for node classification, naming and geometry signatures."""

from __future__ import annotations

import pytest

from scenejsx.analyze.identity import (
    classify,
    describe_node,
    is_primitive,
    is_targeted_light,
    is_var_name,
    mesh_key,
    node_name,
    quote,
    sanitize_mesh_name,
    sanitize_name,
)
from scenejsx.models.scene import Geometry, LightSettings, Material, SceneNode


class TestClassification:
    @pytest.mark.parametrize("node_type,kind", [
        ("Scene", "group"),
        ("Group", "group"),
        ("Object3D", "group"),
        ("Mesh", "mesh"),
        ("SkinnedMesh", "mesh"),
        ("Bone", "bone"),
        ("PointLight", "light"),
        ("SpotLight", "light"),
        ("PerspectiveCamera", "camera"),
        ("Primitive", "primitive"),
        ("Points", "ungrouped"),
    ])
    def test_classify(self, node_type: str, kind: str):
        assert classify(SceneNode(type=node_type)) == kind

    def test_targeted_light_needs_target(self):
        light = SceneNode(type="SpotLight", light=LightSettings())
        assert not is_targeted_light(light)
        light.target = SceneNode(type="Object3D")
        assert is_targeted_light(light)

    def test_point_light_is_never_targeted(self):
        light = SceneNode(type="PointLight", target=SceneNode())
        assert not is_targeted_light(light)

    def test_primitive_passthroughs(self):
        assert is_primitive(SceneNode(type="Bone"))
        assert is_primitive(SceneNode(type="Primitive"))
        assert is_primitive(SceneNode(type="DirectionalLight", target=SceneNode()))
        assert not is_primitive(SceneNode(type="Mesh"))


class TestNames:
    @pytest.mark.parametrize("name,valid", [
        ("Body", True),
        ("_private", True),
        ("$ref", True),
        ("wheel_01", True),
        ("my mesh", False),
        ("1abc", False),
        ("a-b", False),
        ("class", False),
        ("", False),
    ])
    def test_is_var_name(self, name: str, valid: bool):
        assert is_var_name(name) is valid

    def test_sanitize_name(self):
        assert sanitize_name("Body") == ".Body"
        assert sanitize_name("my mesh") == "['my mesh']"

    def test_quote_escapes(self):
        assert quote("it's") == "'it\\'s'"

    def test_node_name(self):
        assert node_name(SceneNode(type="Mesh", name="Body")) == "nodes.Body"
        assert node_name(SceneNode(type="Mesh", name="Glass.001")) == "nodes['Glass.001']"

    @pytest.mark.parametrize("name,expected", [
        ("wheel_front.001", "Wheelfront"),
        ("Body", "Body"),
        ("", "Part"),
        ("123", "Part"),
    ])
    def test_sanitize_mesh_name(self, name: str, expected: str):
        assert sanitize_mesh_name(SceneNode(type="Mesh", name=name)) == expected

    def test_describe_node(self):
        node = SceneNode(type="Group", name="Pivot", uuid="abcdef0123456789")
        assert describe_node(node) == "Group Pivot [abcdef01]"
        node.removed = True
        assert describe_node(node).endswith("(removed)")


class TestMeshKey:
    def test_shared_geometry_and_material(self):
        geometry = Geometry()
        material = Material(name="Paint")
        a = SceneNode(type="Mesh", geometry=geometry, material=material)
        b = SceneNode(type="Mesh", geometry=geometry, material=material)
        assert mesh_key(a) == mesh_key(b)

    def test_different_material(self):
        geometry = Geometry()
        a = SceneNode(type="Mesh", geometry=geometry, material=Material(name="Red"))
        b = SceneNode(type="Mesh", geometry=geometry, material=Material(name="Blue"))
        assert mesh_key(a) != mesh_key(b)

    def test_unnamed_materials_use_identity(self):
        geometry = Geometry()
        a = SceneNode(type="Mesh", geometry=geometry, material=Material())
        b = SceneNode(type="Mesh", geometry=geometry, material=Material())
        assert mesh_key(a) != mesh_key(b)

    def test_material_list(self):
        geometry = Geometry()
        materials = [Material(name="A"), Material(name="B")]
        a = SceneNode(type="Mesh", geometry=geometry, material=materials)
        assert mesh_key(a).endswith(":A,B")


class TestSceneNode:
    def test_add_reparents(self):
        a, b, child = SceneNode(name="a"), SceneNode(name="b"), SceneNode(name="c")
        a.add(child)
        b.add(child)
        assert child.parent is b
        assert a.children == []
        assert b.children == [child]

    def test_constructor_children_get_parent(self):
        child = SceneNode()
        parent = SceneNode(children=[child])
        assert child.parent is parent

    def test_traverse_is_preorder(self):
        leaf = SceneNode(name="leaf")
        mid = SceneNode(name="mid").add(leaf)
        root = SceneNode(type="Scene", name="root").add(mid, SceneNode(name="other"))
        assert [n.name for n in root.traverse()] == ["root", "mid", "leaf", "other"]

    def test_add_self_rejected(self):
        node = SceneNode()
        with pytest.raises(ValueError):
            node.add(node)
