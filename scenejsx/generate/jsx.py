"""JSX element IR and element naming."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from scenejsx.analyze.identity import (
    is_camera,
    is_group,
    is_primitive,
    is_scene,
    is_targeted_light,
)
from scenejsx.models.scene import SceneNode

if TYPE_CHECKING:
    from scenejsx.analyze.analyzed import AnalyzedScene

INDENT = "  "


@dataclass
class JsxText:
    """Verbatim JSX child, e.g. an expression container."""

    text: str

    def render(self, indent: int = 0) -> str:
        return INDENT * indent + self.text


@dataclass
class JsxElement:
    """An element with attributes (already serialized) and children.

    Rendered self-closing when it has no children.
    """

    tag: str
    attributes: list[str] = field(default_factory=list)
    children: list[JsxNode] = field(default_factory=list)

    def render(self, indent: int = 0) -> str:
        pad = INDENT * indent
        opening = self.tag + "".join(" " + a for a in self.attributes)
        if not self.children:
            return f"{pad}<{opening} />"
        body = "\n".join(child.render(indent + 1) for child in self.children)
        return f"{pad}<{opening}>\n{body}\n{pad}</{self.tag}>"


JsxNode = Union[JsxElement, JsxText]


def get_jsx_element_name(node: SceneNode, analyzed: AnalyzedScene) -> str:
    """Tag used for *node*: shared instance, passthrough, or lower-camel type."""
    if analyzed.get_info(node).instanced:
        duplicate = analyzed.get_duplicate(node)
        if duplicate is not None:
            return f"instances.{duplicate.name}"
    if is_primitive(node) and not is_targeted_light(node):
        return "primitive"
    if is_camera(node):
        # drei camera components
        return node.type
    if is_group(node) or is_scene(node):
        return "group"
    return node.type[:1].lower() + node.type[1:]
