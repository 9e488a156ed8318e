"""One-call entry point: analyse a scene graph and generate its component.

Usage::

    from scenejsx.pipeline import generate_component
    from scenejsx.readers import read_gltf

    graph = read_gltf("helmet.glb")
    tsx = generate_component(graph, GenerateOptions(component_name="Helmet"))
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from scenejsx.analyze.analyzed import AnalyzedScene
from scenejsx.generate.r3f import GeneratedR3F
from scenejsx.models.options import GenerateOptions
from scenejsx.models.scene import SceneGraph

logger = logging.getLogger(__name__)


def generate_component(
    graph: SceneGraph,
    options: GenerateOptions | None = None,
    formatter: Callable[[str], str] | None = None,
) -> str:
    """Analyse *graph* (pruning it in place) and return the component source.

    Parameters
    ----------
    graph:
        Scene graph handed over by a reader; mutated in place.
    options:
        Generation options, also used for the analysis.
    formatter:
        Optional external pretty-printer applied to the final text.
    """
    options = options or GenerateOptions()
    analyzed = AnalyzedScene(graph, options)
    logger.debug(
        "Analyzed scene: %d duplicate geometries, %d prune passes",
        len(analyzed.dup_geometries), analyzed.prune_passes,
    )
    return GeneratedR3F(analyzed, options).to_tsx(formatter)
