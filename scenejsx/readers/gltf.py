"""glTF/GLB reader: builds a :class:`SceneGraph` with pygltflib.

Only the scene structure is read (hierarchy, transforms, resource identity,
lights, cameras, animation names); buffers are never decoded.  Node types
follow what three.js' GLTFLoader produces for the same file.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import pygltflib

from scenejsx.models.scene import (
    ONE,
    ZERO,
    AnimationClip,
    CameraSettings,
    Geometry,
    LightSettings,
    MalformedSceneError,
    Material,
    SceneGraph,
    SceneNode,
    Vector3,
)

logger = logging.getLogger(__name__)

LIGHTS_EXTENSION = "KHR_lights_punctual"

# Material extensions that need MeshPhysicalMaterial in three.js
PHYSICAL_EXTENSIONS = frozenset({
    "KHR_materials_clearcoat",
    "KHR_materials_ior",
    "KHR_materials_iridescence",
    "KHR_materials_sheen",
    "KHR_materials_specular",
    "KHR_materials_transmission",
    "KHR_materials_volume",
})
UNLIT_EXTENSION = "KHR_materials_unlit"

_LIGHT_TYPES = {
    "directional": "DirectionalLight",
    "point": "PointLight",
    "spot": "SpotLight",
}


def read_gltf(path: str | Path) -> SceneGraph:
    """Load a ``.gltf`` / ``.glb`` file into a scene graph.

    Raises
    ------
    FileNotFoundError
        When *path* does not exist.
    MalformedSceneError
        When the file has no scene to use as root.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"glTF file not found: {path}")

    gltf = pygltflib.GLTF2().load(str(path))
    return _GLTFSceneBuilder(gltf).build()


class _GLTFSceneBuilder:
    def __init__(self, gltf: pygltflib.GLTF2) -> None:
        self.gltf = gltf
        self._names: dict[str, int] = {}
        self._used_names: set[str] = set()
        self._geometries: dict[tuple[int, int], Geometry] = {}
        self._default_material: Material | None = None
        self.materials = [self._material(m) for m in gltf.materials or []]
        self.joints = {j for skin in gltf.skins or [] for j in skin.joints or []}
        self.lights = ((gltf.extensions or {}).get(LIGHTS_EXTENSION) or {}).get("lights", [])

    def build(self) -> SceneGraph:
        scenes = self.gltf.scenes or []
        if not scenes:
            raise MalformedSceneError("glTF file has no scenes")
        index = self.gltf.scene if self.gltf.scene is not None else 0
        if not 0 <= index < len(scenes):
            raise MalformedSceneError(f"glTF default scene {index} does not exist")

        scene_def = scenes[index]
        root = SceneNode(type="Scene", name=scene_def.name or "Scene")
        for node_index in scene_def.nodes or []:
            root.add(self._node(node_index))

        animations = [
            AnimationClip(name=a.name or f"animation_{i}")
            for i, a in enumerate(self.gltf.animations or [])
        ]
        extras = {}
        if self.gltf.asset is not None and isinstance(self.gltf.asset.extras, dict):
            extras = dict(self.gltf.asset.extras)

        logger.debug(
            "Read glTF scene %r: %d nodes, %d animations",
            root.name, sum(1 for _ in root.traverse()) - 1, len(animations),
        )
        return SceneGraph(root=root, animations=animations, asset_extras=extras)

    def _unique_name(self, name: str) -> str:
        """Return *name*, or *name* with the first unused ``_N`` suffix."""
        if not name:
            return ""
        count = self._names.get(name, 0)
        candidate = name
        while candidate in self._used_names:
            count += 1
            candidate = f"{name}_{count}"
        self._names[name] = count
        self._used_names.add(candidate)
        return candidate

    def _material(self, material_def: Any) -> Material:
        extensions = set((material_def.extensions or {}).keys())
        if UNLIT_EXTENSION in extensions:
            material_type = "MeshBasicMaterial"
        elif extensions & PHYSICAL_EXTENSIONS:
            material_type = "MeshPhysicalMaterial"
        else:
            material_type = "MeshStandardMaterial"
        return Material(name=material_def.name or "", type=material_type)

    def _primitive_material(self, index: int | None) -> Material:
        if index is not None and 0 <= index < len(self.materials):
            return self.materials[index]
        if self._default_material is None:
            self._default_material = Material()
        return self._default_material

    def _node(self, index: int) -> SceneNode:
        node_def = self.gltf.nodes[index]
        node = self._node_object(index, node_def)
        node.position, node.rotation, node.scale = _transform(node_def)
        for child_index in node_def.children or []:
            node.add(self._node(child_index))
        return node

    def _node_object(self, index: int, node_def: Any) -> SceneNode:
        name = self._unique_name(node_def.name or "")
        objects: list[SceneNode] = []

        if node_def.mesh is not None:
            objects.extend(self._meshes(node_def))
        if node_def.camera is not None:
            objects.append(self._camera(node_def.camera))
        light_ext = (node_def.extensions or {}).get(LIGHTS_EXTENSION)
        if light_ext is not None and light_ext.get("light") is not None:
            objects.append(self._light(light_ext["light"]))

        if index in self.joints:
            node = SceneNode(type="Bone", name=name)
            node.add(*objects)
        elif len(objects) > 1:
            node = SceneNode(type="Group", name=name)
            node.add(*objects)
        elif objects:
            node = objects[0]
            node.name = name or node.name
        else:
            node = SceneNode(type="Object3D", name=name)
        return node

    def _meshes(self, node_def: Any) -> list[SceneNode]:
        mesh_def = self.gltf.meshes[node_def.mesh]
        mesh_type = "SkinnedMesh" if node_def.skin is not None else "Mesh"
        extras = mesh_def.extras if isinstance(mesh_def.extras, dict) else {}
        target_names = extras.get("targetNames") or []
        weights = list(getattr(node_def, "weights", None) or getattr(mesh_def, "weights", None) or [])

        meshes = []
        for p_index, primitive in enumerate(mesh_def.primitives):
            key = (node_def.mesh, p_index)
            geometry = self._geometries.get(key)
            if geometry is None:
                geometry = Geometry(name=mesh_def.name or "", morph_targets=list(target_names))
                self._geometries[key] = geometry

            mesh = SceneNode(
                type=mesh_type,
                name=self._unique_name(mesh_def.name or f"mesh_{node_def.mesh}"),
                geometry=geometry,
                material=self._primitive_material(primitive.material),
            )
            targets = primitive.targets or []
            if targets:
                names = list(target_names) or [str(i) for i in range(len(targets))]
                mesh.morph_target_dictionary = {n: i for i, n in enumerate(names)}
                mesh.morph_target_influences = weights or [0.0] * len(targets)
            meshes.append(mesh)
        return meshes

    def _camera(self, index: int) -> SceneNode:
        camera_def = self.gltf.cameras[index]
        if camera_def.type == "orthographic" and camera_def.orthographic is not None:
            ortho = camera_def.orthographic
            return SceneNode(
                type="OrthographicCamera",
                camera=CameraSettings(near=ortho.znear or 0.1, far=ortho.zfar or 2000.0),
            )
        perspective = camera_def.perspective
        settings = CameraSettings()
        if perspective is not None:
            settings.fov = math.degrees(perspective.yfov)
            settings.near = perspective.znear
            settings.far = perspective.zfar if perspective.zfar is not None else 2e6
        return SceneNode(type="PerspectiveCamera", camera=settings)

    def _light(self, index: int) -> SceneNode:
        light_def = self.lights[index]
        light_type = _LIGHT_TYPES.get(light_def.get("type"), "PointLight")
        settings = LightSettings(
            intensity=light_def.get("intensity", 1.0),
            color=_hex_color(light_def.get("color", [1.0, 1.0, 1.0])),
            distance=light_def.get("range") or 0.0,
        )
        node = SceneNode(type=light_type, name=light_def.get("name", ""), light=settings)
        if light_type == "SpotLight":
            spot = light_def.get("spot", {})
            outer = spot.get("outerConeAngle", math.pi / 4)
            inner = spot.get("innerConeAngle", 0.0)
            settings.angle = outer
            settings.penumbra = 1.0 - inner / outer if outer else 0.0
        if light_type in ("SpotLight", "DirectionalLight"):
            node.target = SceneNode(type="Object3D", position=(0.0, 0.0, -1.0))
        return node


def _hex_color(rgb: list[float]) -> str:
    return "".join(f"{max(0, min(255, round(c * 255))):02x}" for c in rgb[:3])


def _transform(node_def: Any) -> tuple[Vector3, Vector3, Vector3]:
    if node_def.matrix:
        return _decompose(node_def.matrix)
    position = tuple(node_def.translation) if node_def.translation else ZERO
    rotation = _quaternion_to_euler(node_def.rotation) if node_def.rotation else ZERO
    scale = tuple(node_def.scale) if node_def.scale else ONE
    return position, rotation, scale


def _quaternion_to_euler(q: list[float]) -> Vector3:
    x, y, z, w = q
    return _euler_xyz(
        m11=1 - 2 * (y * y + z * z),
        m12=2 * (x * y - w * z),
        m13=2 * (x * z + w * y),
        m22=1 - 2 * (x * x + z * z),
        m23=2 * (y * z - w * x),
        m32=2 * (y * z + w * x),
        m33=1 - 2 * (x * x + y * y),
    )


def _euler_xyz(m11: float, m12: float, m13: float, m22: float, m23: float,
               m32: float, m33: float) -> Vector3:
    """XYZ Euler angles of a rotation matrix (three.js convention)."""
    ey = math.asin(max(-1.0, min(1.0, m13)))
    if abs(m13) < 0.9999999:
        return (math.atan2(-m23, m33), ey, math.atan2(-m12, m11))
    return (math.atan2(m32, m22), ey, 0.0)


def _decompose(m: list[float]) -> tuple[Vector3, Vector3, Vector3]:
    """Split a column-major 4x4 matrix into translation, Euler rotation, scale."""
    sx = math.hypot(m[0], m[1], m[2])
    sy = math.hypot(m[4], m[5], m[6])
    sz = math.hypot(m[8], m[9], m[10])
    det = (
        m[0] * (m[5] * m[10] - m[6] * m[9])
        - m[4] * (m[1] * m[10] - m[2] * m[9])
        + m[8] * (m[1] * m[6] - m[2] * m[5])
    )
    if det < 0:
        sx = -sx
    position = (m[12], m[13], m[14])
    if not (sx and sy and sz):
        return position, ZERO, (sx, sy, sz)
    rotation = _euler_xyz(
        m11=m[0] / sx,
        m12=m[4] / sy,
        m13=m[8] / sz,
        m22=m[5] / sy,
        m23=m[9] / sz,
        m32=m[6] / sy,
        m33=m[10] / sz,
    )
    return position, rotation, (sx, sy, sz)
