"""Data model: scene graph and run options."""

from scenejsx.models.options import AnalyzeOptions, GenerateOptions
from scenejsx.models.scene import (
    AnimationClip,
    CameraSettings,
    Geometry,
    LightSettings,
    MalformedSceneError,
    Material,
    SceneGraph,
    SceneNode,
)

__all__ = [
    "AnalyzeOptions",
    "AnimationClip",
    "CameraSettings",
    "GenerateOptions",
    "Geometry",
    "LightSettings",
    "MalformedSceneError",
    "Material",
    "SceneGraph",
    "SceneNode",
]
