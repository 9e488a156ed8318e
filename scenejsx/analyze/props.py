"""Prop calculator: the serializable property set of a scene node.

Values are either plain numbers/booleans, a string for the props listed in
``config.STRING_PROPS``, or a string holding a source expression (``[1, 2,
3]``, ``nodes.Body.geometry``, ``Math.PI / 2``).
"""

from __future__ import annotations

import json
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

from scenejsx.analyze.identity import (
    is_camera,
    is_mesh,
    is_skinned_mesh,
    material_name,
)
from scenejsx.config import (
    ANGLE_SCALE,
    DEFAULT_CAMERA_FAR,
    DEFAULT_CAMERA_FOV,
    DEFAULT_CAMERA_NEAR,
    DEFAULT_CAMERA_ZOOM,
    DEFAULT_DECAY,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_SPOT_ANGLE_DIVISOR,
    MAX_PI_FACTOR,
)
from scenejsx.models.scene import Material, SceneNode, Vector3

if TYPE_CHECKING:
    from scenejsx.analyze.analyzed import AnalyzedScene


def round_number(n: float, precision: int) -> float:
    """Round like ``parseFloat(n.toFixed(precision))``.

    Exact ties round away from zero (``0.125`` -> ``0.13``).
    """
    exponent = Decimal(1).scaleb(-precision)
    return float(Decimal(n).quantize(exponent, rounding=ROUND_HALF_UP))


def format_number(n: float) -> str:
    """JS-style number literal: ``1`` not ``1.0``, never ``-0``."""
    if n == 0:
        return "0"
    if float(n).is_integer():
        return str(int(n))
    return repr(float(n))


def round_angle(n: float, precision: int) -> str | float:
    """Express *n* radians as a fraction/multiple of pi when it is one.

    Compared at five decimal places; otherwise the rounded number.
    """
    scaled = abs(round(n * ANGLE_SCALE))
    sign = "-" if n < 0 else ""
    for i in range(1, MAX_PI_FACTOR + 1):
        if scaled == round(math.pi / i * ANGLE_SCALE):
            return f"{sign}Math.PI" + (f" / {i}" if i > 1 else "")
    for i in range(1, MAX_PI_FACTOR + 1):
        if scaled == round(math.pi * i * ANGLE_SCALE):
            return f"{sign}Math.PI" + (f" * {i}" if i > 1 else "")
    return round_number(n, precision)


def _expr(value: str | float) -> str:
    return value if isinstance(value, str) else format_number(value)


def _vector(values: Vector3, precision: int) -> tuple[float, float, float]:
    x, y, z = (round_number(v, precision) for v in values)
    return (x, y, z)


def _array(values: tuple[str | float, ...]) -> str:
    return "[" + ", ".join(_expr(v) for v in values) + "]"


def _light_props(node: SceneNode, props: dict[str, Any], precision: int) -> None:
    light = node.light
    if light is None:
        return

    intensity = round_number(light.intensity, precision)
    if intensity != 1:
        props["intensity"] = intensity

    if node.type == "SpotLight":
        default_angle = math.pi / DEFAULT_SPOT_ANGLE_DIVISOR
        if round_number(light.angle, precision) != round_number(default_angle, precision):
            props["angle"] = round_angle(light.angle, precision)
        penumbra = round_number(light.penumbra, precision)
        if penumbra != 0:
            props["penumbra"] = penumbra

    if node.type in ("PointLight", "SpotLight"):
        decay = round_number(light.decay, precision)
        if decay != DEFAULT_DECAY:
            props["decay"] = decay
        distance = round_number(light.distance, precision)
        if distance != 0:
            props["distance"] = distance

    color = light.color.lstrip("#").lower()
    if color != DEFAULT_LIGHT_COLOR:
        props["color"] = f'"#{color}"'
    if light.ground_color is not None:
        props["groundColor"] = f'"#{light.ground_color.lstrip("#").lower()}"'


def _camera_props(node: SceneNode, props: dict[str, Any], precision: int) -> None:
    camera = node.camera
    props["makeDefault"] = False
    if camera is None:
        return
    if node.type == "PerspectiveCamera":
        fov = round_number(camera.fov, precision)
        if fov != DEFAULT_CAMERA_FOV:
            props["fov"] = fov
    for key, value, default in (
        ("near", camera.near, DEFAULT_CAMERA_NEAR),
        ("far", camera.far, DEFAULT_CAMERA_FAR),
        ("zoom", camera.zoom, DEFAULT_CAMERA_ZOOM),
    ):
        rounded = round_number(value, precision)
        if rounded != default:
            props[key] = rounded


def calculate_props(node: SceneNode, analyzed: AnalyzedScene) -> dict[str, Any]:
    """Return the props written for *node*, in emission order."""
    options = analyzed.options
    precision = options.precision
    info = analyzed.get_info(node)
    ref = info.node
    props: dict[str, Any] = {}

    # Shared resources first; instanced meshes get both from the instance
    if is_mesh(node) and not info.instanced:
        if node.geometry is not None:
            props["geometry"] = f"{ref}.geometry"
        if node.material is not None:
            if isinstance(node.material, Material) and node.material.name:
                props["material"] = material_name(node.material)
            else:
                props["material"] = f"{ref}.material"
    if is_skinned_mesh(node):
        props["skeleton"] = f"{ref}.skeleton"

    if (options.keep_names or info.animated) and node.name:
        props["name"] = node.name
    if options.meta and node.user_data:
        props["userData"] = json.dumps(node.user_data, sort_keys=True)

    if node.cast_shadow or (options.shadows and is_mesh(node)):
        props["castShadow"] = True
    if node.receive_shadow or (options.shadows and is_mesh(node)):
        props["receiveShadow"] = True
    if not node.visible:
        props["visible"] = False

    if is_mesh(node) and node.morph_target_dictionary:
        props["morphTargetDictionary"] = f"{ref}.morphTargetDictionary"
        props["morphTargetInfluences"] = f"{ref}.morphTargetInfluences"

    _light_props(node, props, precision)
    if is_camera(node):
        _camera_props(node, props, precision)

    position = _vector(node.position, precision)
    if any(position):
        props["position"] = _array(position)

    if any(round_number(r, precision) for r in node.rotation):
        props["rotation"] = _array(tuple(round_angle(r, precision) for r in node.rotation))

    scale = _vector(node.scale, precision)
    if scale != (1.0, 1.0, 1.0):
        if scale[0] == scale[1] == scale[2]:
            props["scale"] = scale[0]
        else:
            props["scale"] = _array(scale)

    return props
