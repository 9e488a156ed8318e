"""Boilerplate template of a generated React Three Fiber component.

Every potential import is included; unused ones are left for the user's
linter to sort out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from scenejsx.analyze.identity import quote
from scenejsx.config import DREI_IMPORTS, FIBER_IMPORTS, THREE_IMPORTS
from scenejsx.generate.jsx import JsxElement, JsxText
from scenejsx.generate.module import (
    ComponentModule,
    ConstDecl,
    FunctionDecl,
    InterfaceDecl,
    RawText,
)
from scenejsx.models.options import GenerateOptions

if TYPE_CHECKING:
    from scenejsx.analyze.analyzed import AnalyzedScene


@dataclass(frozen=True)
class ComponentNames:
    """Names of the declarations derived from the component name."""

    component: str
    props: str
    action: str
    gltf: str
    instances: str

    @classmethod
    def for_component(cls, component_name: str) -> ComponentNames:
        return cls(
            component=component_name,
            props=component_name + "Props",
            action=component_name + "Action",
            gltf=component_name + "GLTF",
            instances=component_name + "Instances",
        )


def _header(a: AnalyzedScene, options: GenerateOptions) -> RawText:
    lines = ["/*", f"  {options.header or 'Auto-generated'}"]
    if options.size:
        lines.append(f"  Files: {options.size}")
    for key, value in a.graph.asset_extras.items():
        lines.append(f"  {key[:1].upper() + key[1:]}: {value}")
    lines.append("*/")
    return RawText("\n".join(lines))


def _imports(a: AnalyzedScene) -> RawText:
    three = set(THREE_IMPORTS)
    three.update(node.type for node in a.get_meshes() + a.get_bones())
    three.update(material.type for material in a.get_materials())
    lines = [
        f"import {{ {', '.join(DREI_IMPORTS)} }} from '@react-three/drei'",
        f"import {{ {', '.join(FIBER_IMPORTS)} }} from '@react-three/fiber'",
        "import * as React from 'react'",
        f"import {{ {', '.join(sorted(three))} }} from 'three'",
        "import { GLTF, SkeletonUtils } from 'three-stdlib'",
    ]
    return RawText("\n".join(lines))


def _instances_function(
    a: AnalyzedScene, options: GenerateOptions, names: ComponentNames
) -> FunctionDecl:
    table = ", ".join(f"{d.name}: {d.node}" for d in a.get_duplicate_geometry_values())
    merged = JsxElement(
        "Merged",
        ["meshes={instances}", "{...props}"],
        [JsxText(
            "{(instances: ContextType) => "
            "<context.Provider value={instances} children={children} />}"
        )],
    )
    return FunctionDecl(
        name=names.instances,
        params=f"{{ children, ...props }}: {names.props}",
        statements=[
            f"const {{ nodes }} = useGLTF(modelLoadPath, draco) as {names.gltf}",
            f"const instances = React.useMemo(() => ({{ {table} }}), [nodes])",
        ],
        returns=merged,
    )


def _component_function(
    a: AnalyzedScene,
    options: GenerateOptions,
    names: ComponentNames,
    *,
    has_primitives: bool,
) -> FunctionDecl:
    has_animations = a.has_animations()
    animations = "animations, " if has_animations else ""
    statements: list[str] = []

    if a.has_instances():
        statements.append("const instances = React.useContext(context)")
    if has_primitives:
        # bones and light targets are reused as objects, so work on a clone
        statements.extend([
            f"const {{ {animations}scene }} = useGLTF(modelLoadPath, draco) as {names.gltf}",
            "const clone = React.useMemo(() => SkeletonUtils.clone(scene), [scene])",
            f"const {{ nodes, materials }} = useGraph(clone) as unknown as {names.gltf}",
        ])
    else:
        statements.append(
            f"const {{ {animations}nodes, materials }} = useGLTF(modelLoadPath, draco) as {names.gltf}"
        )

    attributes = ["{...props}", "dispose={null}"]
    if has_animations:
        statements.extend([
            "const groupRef = React.useRef<Group>(null)",
            "const { actions } = useAnimations(animations, groupRef)",
        ])
        attributes.insert(0, "ref={groupRef}")

    return FunctionDecl(
        name=names.component,
        params=f"props: {names.props}",
        statements=statements,
        returns=JsxElement("group", attributes),
        export="export default" if options.export_default else "export",
    )


def build_template(
    a: AnalyzedScene,
    options: GenerateOptions,
    names: ComponentNames,
    *,
    has_primitives: bool,
) -> ComponentModule:
    """Return the component module with empty ``nodes``/``materials`` types
    and an empty root ``<group>``, ready to be filled in by the generator."""
    module = ComponentModule(file_name=f"{options.component_name}.tsx")
    module.add(_header(a, options))
    module.add(_imports(a))

    if a.has_animations():
        clip_names = " | ".join(quote(clip.name) for clip in a.graph.animations)
        module.add(RawText(f"type {names.action}Names = {clip_names}"))
        module.add(InterfaceDecl(
            names.action,
            extends="AnimationClip",
            properties={"name": f"{names.action}Names"},
        ))

    gltf = InterfaceDecl(names.gltf, extends="GLTF", properties={"nodes": "{}", "materials": "{}"})
    if a.has_animations():
        gltf.set_type("animations", f"{names.action}[]")
    module.add(gltf)
    module.add(InterfaceDecl(names.props, extends="GroupProps", exported=True))

    module.add(ConstDecl("modelLoadPath", "'<foo>.glb'"))
    module.add(ConstDecl("draco", "false"))

    if a.has_instances():
        module.add(RawText(
            "type ContextType = Record<string, React.ForwardRefExoticComponent<MeshProps>>"
        ))
        module.add(RawText("const context = React.createContext<ContextType>({})"))
        module.add(_instances_function(a, options, names))

    module.add(_component_function(a, options, names, has_primitives=has_primitives))
    module.add(RawText("useGLTF.preload(modelLoadPath, draco)"))
    return module
