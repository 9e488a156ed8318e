"""GeneratedR3F: React Three Fiber component source for an analyzed scene.

Usage::

    from scenejsx.generate import GeneratedR3F

    g = GeneratedR3F(analyzed, GenerateOptions(component_name="Helmet"))
    tsx = g.to_tsx()

The source is assembled from a template (:func:`build_template`) whose
well-known declarations are then edited in place.  Methods are split so a
subclass can customise single steps, e.g. override :meth:`get_template`.
The text returned by :meth:`to_tsx` is unformatted; pass a ``formatter``
to hand it to an external pretty-printer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from scenejsx.analyze.analyzed import AnalyzedScene
from scenejsx.analyze.identity import (
    is_bone,
    is_primitive,
    is_removed,
    is_targeted_light,
    is_var_name,
    node_name,
    quote,
)
from scenejsx.analyze.props import format_number
from scenejsx.config import STRING_PROPS
from scenejsx.generate.jsx import JsxElement, JsxNode, get_jsx_element_name
from scenejsx.generate.module import ComponentModule, FunctionDecl, InterfaceDecl
from scenejsx.generate.template import ComponentNames, build_template
from scenejsx.models.options import GenerateOptions
from scenejsx.models.scene import SceneNode

logger = logging.getLogger(__name__)


class TemplateAnchorError(Exception):
    """Raised when the template lacks a declaration the generator edits."""


def _type_key(name: str) -> str:
    return name if is_var_name(name) else quote(name)


def _write_prop(key: str, value: Any) -> str:
    if key in STRING_PROPS:
        text = str(value)
        return f"{key}={{{quote(text)}}}" if '"' in text else f'{key}="{text}"'
    if value is True:
        return key
    if value is False:
        return f"{key}={{false}}"
    if isinstance(value, (int, float)):
        return f"{key}={{{format_number(value)}}}"
    return f"{key}={{{value}}}"


class GeneratedR3F:
    """Generate a React Three Fiber component.

    Parameters
    ----------
    analyzed:
        The analyzed (and pruned) scene.
    options:
        Generation options; ``bones`` controls how bones are emitted.
    """

    def __init__(self, analyzed: AnalyzedScene, options: GenerateOptions) -> None:
        self.a = analyzed
        self.options = options
        self.names = ComponentNames.for_component(options.component_name)

        self.src: ComponentModule = self.get_template()

        # Locate the declarations edited below
        self.gltf_interface: InterfaceDecl = self._get_interface(self.names.gltf)
        self.props_interface: InterfaceDecl = self._get_interface(self.names.props)

        fn = self.src.get_function(self.names.component)
        if fn is None:
            raise TemplateAnchorError(f"Model function not found: {self.names.component}")
        self.fn: FunctionDecl = fn
        if fn.returns is None:
            raise TemplateAnchorError(f"Model function return not found: {self.names.component}")
        self.group_root: JsxElement = fn.returns

        # Only present when the scene has shared instances
        self.instances_fn: FunctionDecl | None = self.src.get_function(self.names.instances)

        self.set_constants()
        self.set_model_gltf_types()
        self.generate_children()

        logger.info(
            "Generated component %s (%d top-level elements, instances=%s)",
            self.names.component,
            len(self.group_root.children),
            self.instances_fn is not None,
        )

    def to_tsx(self, formatter: Callable[[str], str] | None = None) -> str:
        """Return the component source, optionally passed through *formatter*."""
        text = self.src.render()
        return formatter(text) if formatter is not None else text

    def get_template(self) -> ComponentModule:
        return build_template(self.a, self.options, self.names, has_primitives=self.has_primitives())

    def has_primitives(self) -> bool:
        return self.a.includes(is_primitive)

    def set_constants(self) -> None:
        path = self.options.model_load_path
        if not path.lower().startswith("http") and not path.startswith("/"):
            path = "/" + path
        model_load_path = self.src.get_variable("modelLoadPath")
        if model_load_path is not None:
            model_load_path.set_initializer(quote(path))
        draco = self.src.get_variable("draco")
        if draco is not None:
            draco.set_initializer("true" if self.options.draco else "false")

    def set_model_gltf_types(self) -> None:
        """Type the ``nodes`` and ``materials`` maps of the GLTF interface."""
        if self.gltf_interface.get_property("nodes") is None:
            raise TemplateAnchorError(f"{self.names.gltf} nodes not found")
        if self.gltf_interface.get_property("materials") is None:
            raise TemplateAnchorError(f"{self.names.gltf} materials not found")

        nodes: dict[str, str] = {}
        for node in self.a.get_meshes() + self.a.get_bones():
            # unnamed nodes are still referenced as nodes['']
            nodes.setdefault(node.name, node.type)
        self.gltf_interface.set_type("nodes", self._type_literal(nodes))

        materials = {m.name: m.type for m in self.a.get_materials()}
        self.gltf_interface.set_type("materials", self._type_literal(materials))

    def generate_children(self) -> None:
        """Fill the root ``<group>`` with the scene's children."""
        elements: list[JsxNode] = []
        for child in list(self.a.scene.children):
            elements.extend(self.build(child))
        self.group_root.children = elements

    def generate(self, node: SceneNode) -> str:
        """Render the JSX for *node* and its subtree."""
        return "\n".join(element.render() for element in self.build(node))

    def build(self, node: SceneNode) -> list[JsxNode]:
        """Elements for *node*; a removed node contributes only its children."""
        children: list[JsxNode] = []
        for child in list(node.children):
            children.extend(self.build(child))

        if is_removed(node):
            return children

        element = get_jsx_element_name(node, self.a)
        ref = node_name(node)

        if is_bone(node) and not self.options.bones:
            return [JsxElement(element, [f"object={{{ref}}}"])]

        if is_targeted_light(node):
            target = JsxElement(
                "primitive",
                [f"object={{{ref}.target}}", *self.write_props(node.target)],
            )
            return [JsxElement(element, self.write_props(node), [target, *children])]

        attributes: list[str] = []
        if is_primitive(node):
            attributes.append(f"object={{{ref}}}")
        attributes.extend(self.write_props(node))
        return [JsxElement(element, attributes, children)]

    def write_props(self, node: SceneNode) -> list[str]:
        props = self.a.calculate_props(node)
        return [_write_prop(key, value) for key, value in props.items()]

    @staticmethod
    def _type_literal(entries: dict[str, str]) -> str:
        if not entries:
            return "{}"
        return "{ " + ", ".join(f"{_type_key(k)}: {v}" for k, v in entries.items()) + " }"

    def _get_interface(self, name: str) -> InterfaceDecl:
        interface = self.src.get_interface(name)
        if interface is None:
            raise TemplateAnchorError(f"{name} interface not found")
        return interface
