"""AnalyzedScene: main entry point for scene analysis.

Usage::

    from scenejsx.analyze import AnalyzedScene
    from scenejsx.models import AnalyzeOptions

    a = AnalyzedScene(graph, AnalyzeOptions(instance=True))
    a.has_instances()

Construction collects every node, builds the duplicate geometry/material
tables and prunes the graph in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from scenejsx.analyze.identity import (
    describe_node,
    is_bone,
    is_mesh,
    is_not_removed,
    is_removed,
    mesh_key,
    node_name,
    sanitize_mesh_name,
)
from scenejsx.analyze.props import calculate_props, round_angle, round_number
from scenejsx.analyze.strategies import ALL_PRUNE_STRATEGIES, PruneStrategy
from scenejsx.config import INSTANCE_ALL_THRESHOLD, INSTANCE_THRESHOLD
from scenejsx.models.options import AnalyzeOptions
from scenejsx.models.scene import MalformedSceneError, Material, SceneGraph, SceneNode

logger = logging.getLogger(__name__)


@dataclass
class DuplicateGeometry:
    """A geometry signature and how often it occurs."""

    count: int
    name: str
    node: str


@dataclass(frozen=True)
class ObjectInfo:
    node: str
    instanced: bool
    animated: bool


class AnalyzedScene:
    """Analyze a scene graph, collect duplicates and prune it.

    Parameters
    ----------
    graph:
        The scene graph; it is mutated in place.
    options:
        Analysis options.
    prune_strategies:
        Ordered strategies; defaults to ``ALL_PRUNE_STRATEGIES``.
    """

    def __init__(
        self,
        graph: SceneGraph,
        options: AnalyzeOptions | None = None,
        prune_strategies: list[PruneStrategy] | None = None,
    ) -> None:
        if graph is None:
            raise MalformedSceneError("No scene graph given")
        self.graph = graph
        self.scene = graph.require_root()
        self.options = options or AnalyzeOptions()
        self.prune_strategies = list(
            ALL_PRUNE_STRATEGIES if prune_strategies is None else prune_strategies
        )

        self.dup_materials: dict[str, int] = {}
        self.dup_geometries: dict[str, DuplicateGeometry] = {}
        self.prune_passes = 0

        # Flat registry in traversal order, used by compact()
        self.objects: list[SceneNode] = list(self.scene.traverse())

        self._collect_duplicates()
        self._prune_duplicates()
        self.prune_all_strategies()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_animations(self) -> bool:
        return len(self.graph.animations) > 0

    def has_instances(self) -> bool:
        return (self.options.instance or self.options.instance_all) and len(self.dup_geometries) > 0

    def get_info(self, node: SceneNode) -> ObjectInfo:
        if node is None:
            raise ValueError("node is None")
        instanced = False
        if (self.options.instance or self.options.instance_all) and is_mesh(node):
            if node.geometry is not None and node.material is not None:
                duplicate = self.dup_geometries.get(mesh_key(node))
                threshold = INSTANCE_ALL_THRESHOLD if self.options.instance_all else INSTANCE_THRESHOLD
                instanced = duplicate is not None and duplicate.count > threshold
        return ObjectInfo(node=node_name(node), instanced=instanced, animated=self.has_animations())

    def get_duplicate(self, node: SceneNode) -> DuplicateGeometry | None:
        return self.dup_geometries.get(mesh_key(node))

    def get_duplicate_geometry_values(self) -> list[DuplicateGeometry]:
        return list(self.dup_geometries.values())

    def live_objects(self) -> list[SceneNode]:
        """Nodes currently reachable from the root and not removed."""
        return [o for o in self.scene.traverse() if is_not_removed(o)]

    def includes(self, predicate: Callable[[SceneNode], bool]) -> bool:
        return any(predicate(o) for o in self.live_objects())

    def get_meshes(self) -> list[SceneNode]:
        return [o for o in self.live_objects() if is_mesh(o)]

    def get_bones(self) -> list[SceneNode]:
        return [o for o in self.live_objects() if is_bone(o)]

    def get_materials(self) -> list[Material]:
        """Named materials of live meshes, unique by name, in traversal order."""
        seen: dict[str, Material] = {}
        for mesh in self.get_meshes():
            materials = mesh.material if isinstance(mesh.material, list) else [mesh.material]
            for material in materials:
                if material is not None and material.name and material.name not in seen:
                    seen[material.name] = material
        return list(seen.values())

    def r_nbr(self, n: float) -> float:
        return round_number(n, self.options.precision)

    def r_deg(self, n: float) -> str | float:
        return round_angle(n, self.options.precision)

    def calculate_props(self, node: SceneNode) -> dict[str, Any]:
        return calculate_props(node, self)

    # ------------------------------------------------------------------
    # Pruning
    # ------------------------------------------------------------------

    def visit_and_prune(self, node: SceneNode) -> SceneNode:
        """Depth-first, children before parent, apply the prune strategies."""
        if is_removed(node):
            for child in list(node.children):
                self.visit_and_prune(child)
            return node

        if is_bone(node):
            # Without bones the bone is emitted as an opaque passthrough
            # that carries its whole subtree.
            if self.options.bones:
                for child in list(node.children):
                    self.visit_and_prune(child)
            return node

        for child in list(node.children):
            self.visit_and_prune(child)

        if self._prune(node):
            logger.debug("Pruned: %s", describe_node(node))
        return node

    def compact(self) -> None:
        """Reparent children of removed nodes, then detach removed nodes."""
        for o in self.objects:
            if not is_removed(o):
                continue
            parent = o.parent
            while parent is not None and is_removed(parent):
                parent = parent.parent
            if parent is None:
                parent = self.scene
            for child in list(o.children):
                parent.add(child)

        for o in self.objects:
            if is_removed(o) and o.parent is not None:
                o.parent.remove(o)

    def prune_all_strategies(self) -> None:
        """Run the prune passes; errors are logged and the partial result kept."""
        try:
            if not self.options.keep_groups:
                # Dry run to prune the obvious dead nodes
                self._prune_pass()
            # Second pass for what only became prunable after compaction
            self._prune_pass()
        except Exception:
            logger.exception("Error while pruning scene after %d pass(es)", self.prune_passes)

    def _prune_pass(self) -> None:
        self.visit_and_prune(self.scene)
        self.compact()
        self.prune_passes += 1
        logger.debug("Prune pass %d done", self.prune_passes)

    def _prune(self, node: SceneNode) -> bool:
        if node is self.scene:
            return False
        props = calculate_props(node, self)
        for strategy in self.prune_strategies:
            if is_removed(node):
                break
            if strategy(self, node, props):
                return True
        return False

    # ------------------------------------------------------------------
    # Duplicates
    # ------------------------------------------------------------------

    def unique_name(self, attempt: str, index: int = 0) -> str:
        candidate = f"{attempt}{index}" if index > 0 else attempt
        if any(d.name == candidate for d in self.dup_geometries.values()):
            return self.unique_name(attempt, index + 1)
        return candidate

    def _collect_duplicates(self) -> None:
        for o in self.scene.traverse():
            if not is_mesh(o):
                continue
            self._collect_duplicate_material(o.material)
            if o.geometry is None:
                continue
            key = mesh_key(o)
            duplicate = self.dup_geometries.get(key)
            if duplicate is None:
                self.dup_geometries[key] = DuplicateGeometry(
                    count=1,
                    name=self.unique_name(sanitize_mesh_name(o)),
                    node=node_name(o),
                )
            else:
                duplicate.count += 1

    def _collect_duplicate_material(self, material: Material | list[Material] | None) -> None:
        if material is None:
            return
        if isinstance(material, list):
            for m in material:
                self._collect_duplicate_material(m)
            return
        if material.name:
            self.dup_materials[material.name] = self.dup_materials.get(material.name, 0) + 1

    def _prune_duplicates(self) -> None:
        # A geometry used once is not worth sharing, unless everything is
        if self.options.instance_all:
            return
        for key in list(self.dup_geometries):
            duplicate = self.dup_geometries[key]
            if duplicate.count == 1:
                del self.dup_geometries[key]
                logger.debug("Deleted duplicate geometry: %s", duplicate.name)
