"""Identity & classification: pure predicates and keys over scene nodes."""

from __future__ import annotations

import re

from scenejsx.config import DEFAULT_MESH_NAME
from scenejsx.models.scene import Material, SceneNode

GROUP_TYPES = frozenset({"Group", "Object3D"})
MESH_TYPES = frozenset({"Mesh", "SkinnedMesh"})
LIGHT_TYPES = frozenset({
    "AmbientLight",
    "DirectionalLight",
    "HemisphereLight",
    "PointLight",
    "RectAreaLight",
    "SpotLight",
})
TARGETED_LIGHT_TYPES = frozenset({"DirectionalLight", "SpotLight"})
CAMERA_TYPES = frozenset({"OrthographicCamera", "PerspectiveCamera"})

# Reserved words that cannot be used as a JS binding / dotted member name
_RESERVED_WORDS = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "implements", "import", "in",
    "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
})

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_NON_LETTERS = re.compile(r"[^a-zA-Z]")


def is_mesh(node: SceneNode) -> bool:
    return node.type in MESH_TYPES


def is_skinned_mesh(node: SceneNode) -> bool:
    return node.type == "SkinnedMesh"


def is_bone(node: SceneNode) -> bool:
    return node.type == "Bone"


def is_group(node: SceneNode) -> bool:
    """Plain containers.  The scene root is not a group."""
    return node.type in GROUP_TYPES


def is_scene(node: SceneNode) -> bool:
    return node.type == "Scene"


def is_light(node: SceneNode) -> bool:
    return node.type in LIGHT_TYPES


def is_targeted_light(node: SceneNode) -> bool:
    """Spot and directional lights aim at a separate target node."""
    return node.type in TARGETED_LIGHT_TYPES and node.target is not None


def is_camera(node: SceneNode) -> bool:
    return node.type in CAMERA_TYPES


def is_primitive(node: SceneNode) -> bool:
    """Nodes emitted as ``<primitive object={...} />`` passthroughs."""
    return is_bone(node) or node.type == "Primitive" or is_targeted_light(node)


def is_removed(node: SceneNode) -> bool:
    return node.removed


def is_not_removed(node: SceneNode) -> bool:
    return not node.removed


def set_removed(node: SceneNode) -> None:
    node.removed = True


def classify(node: SceneNode) -> str:
    """Return the kind of *node*, ``ungrouped`` for unknown types."""
    if is_group(node) or is_scene(node):
        return "group"
    if is_mesh(node):
        return "mesh"
    if is_bone(node):
        return "bone"
    if is_light(node):
        return "light"
    if is_camera(node):
        return "camera"
    if node.type == "Primitive":
        return "primitive"
    return "ungrouped"


def is_var_name(name: str) -> bool:
    """True when *name* can be used verbatim as a JS identifier."""
    return bool(_IDENTIFIER.match(name)) and name not in _RESERVED_WORDS


def quote(name: str) -> str:
    """Single-quoted JS string literal."""
    return "'" + name.replace("\\", "\\\\").replace("'", "\\'") + "'"


def sanitize_name(name: str) -> str:
    """Member-access suffix for *name*: ``.name`` or ``['na me']``."""
    return f".{name}" if is_var_name(name) else f"[{quote(name)}]"


def node_name(node: SceneNode) -> str:
    """Source-level reference to the node inside the loaded ``nodes`` map."""
    return "nodes" + sanitize_name(node.name)


def material_name(material: Material) -> str:
    return "materials" + sanitize_name(material.name)


def sanitize_mesh_name(node: SceneNode) -> str:
    """Identifier-safe base name for a shared geometry resource."""
    name = _NON_LETTERS.sub("", node.name or DEFAULT_MESH_NAME)
    if not name:
        name = DEFAULT_MESH_NAME
    return name[0].upper() + name[1:]


def _material_key(material: Material | list[Material] | None) -> str:
    if material is None:
        return ""
    if isinstance(material, list):
        return ",".join(_material_key(m) for m in material)
    return material.name or material.uuid


def mesh_key(node: SceneNode) -> str:
    """Geometry signature: geometry identity plus material identity."""
    geometry = node.geometry.uuid if node.geometry is not None else ""
    return f"{geometry}:{_material_key(node.material)}"


def describe_node(node: SceneNode) -> str:
    """Short description for log lines."""
    flag = " (removed)" if node.removed else ""
    return f"{node.type} {node.name or '<unnamed>'} [{node.uuid[:8]}]{flag}"
