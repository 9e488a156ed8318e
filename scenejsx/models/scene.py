"""Scene graph model: nodes, geometries, materials, animations.

Mirrors the object model a glTF loader hands over: a single node type whose
``type`` string says what it is (``Mesh``, ``Bone``, ``SpotLight`` ...), an
owning parent -> children edge and a non-owning child -> parent back-reference.
"""

from __future__ import annotations

import math
import uuid as uuid_mod
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

Vector3 = tuple[float, float, float]

ZERO: Vector3 = (0.0, 0.0, 0.0)
ONE: Vector3 = (1.0, 1.0, 1.0)


class MalformedSceneError(Exception):
    """Raised when a scene graph has no traversable root."""


def _new_uuid() -> str:
    return uuid_mod.uuid4().hex


@dataclass(eq=False)
class Geometry:
    """Vertex/index data shared by one or more meshes.

    Only identity matters here: two meshes share data exactly when they
    reference the same ``Geometry`` (same ``uuid``).
    """

    name: str = ""
    uuid: str = field(default_factory=_new_uuid)
    morph_targets: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Material:
    """A named surface material."""

    name: str = ""
    type: str = "MeshStandardMaterial"
    uuid: str = field(default_factory=_new_uuid)


@dataclass
class LightSettings:
    """Light parameters, defaults follow three.js."""

    intensity: float = 1.0
    color: str = "ffffff"
    distance: float = 0.0
    decay: float = 2.0
    angle: float = math.pi / 3
    penumbra: float = 0.0
    ground_color: str | None = None


@dataclass
class CameraSettings:
    """Camera parameters, defaults follow three.js."""

    fov: float = 50.0
    near: float = 0.1
    far: float = 2000.0
    zoom: float = 1.0


@dataclass
class AnimationClip:
    name: str
    duration: float = 0.0


@dataclass(eq=False)
class SceneNode:
    """A node of the scene graph.

    ``removed`` is the pruning tag: a removed node is logically dead but
    stays in the graph until the analyzer compacts it away.
    """

    type: str = "Group"
    name: str = ""
    uuid: str = field(default_factory=_new_uuid)
    position: Vector3 = ZERO
    rotation: Vector3 = ZERO
    scale: Vector3 = ONE
    children: list[SceneNode] = field(default_factory=list, repr=False)
    parent: SceneNode | None = field(default=None, repr=False)

    geometry: Geometry | None = None
    material: Material | list[Material] | None = None
    visible: bool = True
    cast_shadow: bool = False
    receive_shadow: bool = False
    user_data: dict[str, Any] = field(default_factory=dict)
    morph_target_dictionary: dict[str, int] = field(default_factory=dict)
    morph_target_influences: list[float] = field(default_factory=list)

    light: LightSettings | None = None
    camera: CameraSettings | None = None
    target: SceneNode | None = field(default=None, repr=False)

    removed: bool = False

    def __post_init__(self) -> None:
        # children handed to the constructor get their back-reference
        for child in self.children:
            child.parent = self

    def add(self, *nodes: SceneNode) -> SceneNode:
        """Append *nodes* as children, detaching them from any previous parent."""
        for node in nodes:
            if node is self:
                raise ValueError("A node cannot be added as a child of itself")
            if node.parent is not None:
                node.parent.remove(node)
            node.parent = self
            self.children.append(node)
        return self

    def remove(self, *nodes: SceneNode) -> SceneNode:
        """Detach *nodes* from this node; unknown nodes are ignored."""
        for node in nodes:
            if node in self.children:
                self.children.remove(node)
                node.parent = None
        return self

    def traverse(self) -> Iterator[SceneNode]:
        """Yield this node and all descendants, depth-first pre-order."""
        yield self
        for child in list(self.children):
            yield from child.traverse()

    def __contains__(self, node: object) -> bool:
        return any(n is node for n in self.traverse())


@dataclass
class SceneGraph:
    """A loaded scene: the root node plus scene-level resources."""

    root: SceneNode | None
    animations: list[AnimationClip] = field(default_factory=list)
    asset_extras: dict[str, Any] = field(default_factory=dict)

    def require_root(self) -> SceneNode:
        if self.root is None:
            raise MalformedSceneError("Scene graph has no root node")
        return self.root
