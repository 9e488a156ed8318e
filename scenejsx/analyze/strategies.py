"""Prune strategies.

A strategy is a plain callable ``(analyzed, node, props) -> bool``.  It
returns True when it marked *node* removed.  The analyzer evaluates them in
list order and stops at the first match, so a node is claimed by at most one
strategy.  Add a strategy by appending it to the list handed to
:class:`~scenejsx.analyze.analyzed.AnalyzedScene`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from scenejsx.analyze.identity import is_bone, is_group, is_removed, set_removed
from scenejsx.analyze.props import round_number
from scenejsx.models.scene import ONE, ZERO, SceneNode

if TYPE_CHECKING:
    from scenejsx.analyze.analyzed import AnalyzedScene

PruneStrategy = Callable[["AnalyzedScene", SceneNode, dict[str, Any]], bool]

TRANSFORM_PROPS = frozenset({"position", "rotation", "scale"})


def _has_identity_transform(node: SceneNode, precision: int) -> bool:
    def rounded(values: tuple[float, float, float]) -> tuple[float, ...]:
        return tuple(round_number(v, precision) for v in values)

    return (
        rounded(node.position) == ZERO
        and rounded(node.rotation) == ZERO
        and rounded(node.scale) == ONE
    )


def prune_empty_group(a: AnalyzedScene, node: SceneNode, props: dict[str, Any]) -> bool:
    """A group without children renders nothing."""
    if not is_group(node) or node.children:
        return False
    set_removed(node)
    return True


def prune_transparent_group(a: AnalyzedScene, node: SceneNode, props: dict[str, Any]) -> bool:
    """A group without props only wraps its children; hand them to the parent."""
    if not is_group(node) or props:
        return False
    set_removed(node)
    return True


def prune_single_child_transform(
    a: AnalyzedScene, node: SceneNode, props: dict[str, Any]
) -> bool:
    """Fold a transform-only group into its single, untransformed child."""
    if not is_group(node) or len(node.children) != 1:
        return False
    if not props or not set(props) <= TRANSFORM_PROPS:
        return False

    child = node.children[0]
    if is_removed(child) or is_bone(child):
        return False
    if not _has_identity_transform(child, a.options.precision):
        return False

    child.position = node.position
    child.rotation = node.rotation
    child.scale = node.scale
    set_removed(node)
    return True


ALL_PRUNE_STRATEGIES: list[PruneStrategy] = [
    prune_empty_group,
    prune_transparent_group,
    prune_single_child_transform,
]
