"""Scene analysis: classification, props, duplicate detection and pruning."""

from scenejsx.analyze.analyzed import AnalyzedScene, DuplicateGeometry, ObjectInfo
from scenejsx.analyze.props import calculate_props, format_number, round_angle, round_number
from scenejsx.analyze.strategies import (
    ALL_PRUNE_STRATEGIES,
    PruneStrategy,
    prune_empty_group,
    prune_single_child_transform,
    prune_transparent_group,
)

__all__ = [
    "ALL_PRUNE_STRATEGIES",
    "AnalyzedScene",
    "DuplicateGeometry",
    "ObjectInfo",
    "PruneStrategy",
    "calculate_props",
    "format_number",
    "prune_empty_group",
    "prune_single_child_transform",
    "prune_transparent_group",
    "round_angle",
    "round_number",
]
