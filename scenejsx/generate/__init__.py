"""Code generation: React Three Fiber component source."""

from scenejsx.generate.jsx import JsxElement, JsxText, get_jsx_element_name
from scenejsx.generate.module import ComponentModule
from scenejsx.generate.r3f import GeneratedR3F, TemplateAnchorError
from scenejsx.generate.template import ComponentNames, build_template

__all__ = [
    "ComponentModule",
    "ComponentNames",
    "GeneratedR3F",
    "JsxElement",
    "JsxText",
    "TemplateAnchorError",
    "build_template",
    "get_jsx_element_name",
]
