"""Tests for the glTF reader."""

from __future__ import annotations

import math
from pathlib import Path

import pygltflib
import pytest

from scenejsx.models.options import GenerateOptions
from scenejsx.models.scene import MalformedSceneError
from scenejsx.pipeline import generate_component
from scenejsx.readers.gltf import read_gltf


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _car_gltf() -> pygltflib.GLTF2:
    half = math.sqrt(0.5)
    return pygltflib.GLTF2(
        asset=pygltflib.Asset(version="2.0", extras={"author": "Jane"}),
        scene=0,
        scenes=[pygltflib.Scene(name="Garage", nodes=[0, 3])],
        nodes=[
            pygltflib.Node(name="Car", translation=[0.0, 1.0, 0.0], children=[1, 2]),
            pygltflib.Node(name="WheelA", mesh=0),
            pygltflib.Node(name="WheelB", mesh=0, translation=[2.0, 0.0, 0.0]),
            pygltflib.Node(
                name="Sun",
                rotation=[0.0, 0.0, half, half],
                extensions={"KHR_lights_punctual": {"light": 0}},
            ),
        ],
        meshes=[
            pygltflib.Mesh(
                name="Wheel",
                primitives=[pygltflib.Primitive(attributes=pygltflib.Attributes(POSITION=0), material=0)],
            ),
        ],
        materials=[pygltflib.Material(name="Rubber")],
        animations=[pygltflib.Animation(name="Spin")],
        extensions={
            "KHR_lights_punctual": {
                "lights": [{"type": "directional", "color": [1.0, 0.5, 0.0], "intensity": 3.0}],
            },
        },
        extensionsUsed=["KHR_lights_punctual"],
    )


def _save(gltf: pygltflib.GLTF2, tmp_path: Path, name: str = "car.gltf") -> Path:
    path = tmp_path / name
    gltf.save(str(path))
    return path


def _by_name(graph, name: str):
    return next(n for n in graph.root.traverse() if n.name == name)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestReadGLTF:
    def test_hierarchy(self, tmp_path: Path):
        graph = read_gltf(_save(_car_gltf(), tmp_path))

        assert graph.root.type == "Scene"
        assert graph.root.name == "Garage"
        assert [c.name for c in graph.root.children] == ["Car", "Sun"]

        car = _by_name(graph, "Car")
        assert car.type == "Object3D"
        assert car.position == (0.0, 1.0, 0.0)
        assert [c.name for c in car.children] == ["WheelA", "WheelB"]
        assert all(c.parent is car for c in car.children)

    def test_shared_mesh_resources(self, tmp_path: Path):
        graph = read_gltf(_save(_car_gltf(), tmp_path))
        a, b = _by_name(graph, "WheelA"), _by_name(graph, "WheelB")

        assert a.type == b.type == "Mesh"
        assert a.geometry is b.geometry
        assert a.material is b.material
        assert a.material.name == "Rubber"
        assert a.material.type == "MeshStandardMaterial"
        assert b.position == (2.0, 0.0, 0.0)

    def test_directional_light(self, tmp_path: Path):
        graph = read_gltf(_save(_car_gltf(), tmp_path))
        sun = _by_name(graph, "Sun")

        assert sun.type == "DirectionalLight"
        assert sun.light.color == "ff8000"
        assert sun.light.intensity == 3.0
        assert sun.target is not None
        assert sun.target.position == (0.0, 0.0, -1.0)
        assert sun.rotation == pytest.approx((0.0, 0.0, math.pi / 2))

    def test_animations_and_extras(self, tmp_path: Path):
        graph = read_gltf(_save(_car_gltf(), tmp_path))
        assert [a.name for a in graph.animations] == ["Spin"]
        assert graph.asset_extras == {"author": "Jane"}

    def test_duplicate_node_names(self, tmp_path: Path):
        gltf = pygltflib.GLTF2(
            scene=0,
            scenes=[pygltflib.Scene(nodes=[0, 1])],
            nodes=[pygltflib.Node(name="Part"), pygltflib.Node(name="Part")],
        )
        graph = read_gltf(_save(gltf, tmp_path))
        assert [c.name for c in graph.root.children] == ["Part", "Part_1"]
        assert graph.root.name == "Scene"

    def test_suffix_never_reuses_existing_name(self, tmp_path: Path):
        gltf = pygltflib.GLTF2(
            scene=0,
            scenes=[pygltflib.Scene(nodes=[0, 1, 2, 3])],
            nodes=[
                pygltflib.Node(name="a"),
                pygltflib.Node(name="a"),
                pygltflib.Node(name="a_1"),
                pygltflib.Node(name="a"),
            ],
        )
        graph = read_gltf(_save(gltf, tmp_path))
        names = [c.name for c in graph.root.children]
        assert names == ["a", "a_1", "a_1_1", "a_2"]
        assert len(set(names)) == len(names)

    def test_physical_material(self, tmp_path: Path):
        gltf = _car_gltf()
        gltf.materials[0].extensions = {"KHR_materials_transmission": {"transmissionFactor": 1.0}}
        graph = read_gltf(_save(gltf, tmp_path))
        assert _by_name(graph, "WheelA").material.type == "MeshPhysicalMaterial"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_gltf(tmp_path / "missing.glb")

    def test_no_scenes(self, tmp_path: Path):
        path = _save(pygltflib.GLTF2(nodes=[pygltflib.Node(name="Orphan")]), tmp_path)
        with pytest.raises(MalformedSceneError):
            read_gltf(path)


class TestEndToEnd:
    def test_generate_from_file(self, tmp_path: Path):
        graph = read_gltf(_save(_car_gltf(), tmp_path))
        tsx = generate_component(graph, GenerateOptions(instance=True, model_load_path="car.glb"))

        assert tsx.count("<instances.WheelA") == 2
        assert '<directionalLight name="Sun" intensity={3} color={"#ff8000"}' in tsx
        assert "type ModelActionNames = 'Spin'" in tsx
        assert "const modelLoadPath = '/car.glb'" in tsx
        assert "Author: Jane" in tsx
