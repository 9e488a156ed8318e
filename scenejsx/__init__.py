"""scenejsx: prune 3D scene graphs and generate React Three Fiber components."""

__version__ = "1.0.0"

from scenejsx.analyze.analyzed import AnalyzedScene, DuplicateGeometry, ObjectInfo
from scenejsx.analyze.strategies import ALL_PRUNE_STRATEGIES, PruneStrategy
from scenejsx.config import configure_logging
from scenejsx.generate.r3f import GeneratedR3F, TemplateAnchorError
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
from scenejsx.pipeline import generate_component
from scenejsx.readers.gltf import read_gltf

__all__ = [
    "__version__",
    # Analysis
    "ALL_PRUNE_STRATEGIES",
    "AnalyzedScene",
    "DuplicateGeometry",
    "ObjectInfo",
    "PruneStrategy",
    # Generation
    "GeneratedR3F",
    "TemplateAnchorError",
    "generate_component",
    # Model
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
    # Readers / setup
    "configure_logging",
    "read_gltf",
]
