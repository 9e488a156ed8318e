"""Component-module IR: the declarations making up one generated source file.

The generator builds a :class:`ComponentModule` from the template, then
edits the well-known declarations in place (interfaces, constants, the root
element of the component) before rendering it to text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from scenejsx.generate.jsx import INDENT, JsxElement


@dataclass
class RawText:
    text: str

    def render(self) -> str:
        return self.text


@dataclass
class ConstDecl:
    name: str
    initializer: str

    def set_initializer(self, initializer: str) -> None:
        self.initializer = initializer

    def render(self) -> str:
        return f"const {self.name} = {self.initializer}"


@dataclass
class InterfaceDecl:
    name: str
    extends: str | None = None
    properties: dict[str, str] = field(default_factory=dict)
    exported: bool = False

    def get_property(self, name: str) -> str | None:
        return self.properties.get(name)

    def set_type(self, name: str, type_text: str) -> None:
        self.properties[name] = type_text

    def render(self) -> str:
        head = "export " if self.exported else ""
        head += f"interface {self.name}"
        if self.extends:
            head += f" extends {self.extends}"
        if not self.properties:
            return head + " {}"
        body = "\n".join(f"{INDENT}{key}: {value}" for key, value in self.properties.items())
        return f"{head} {{\n{body}\n}}"


@dataclass
class FunctionDecl:
    name: str
    params: str = ""
    statements: list[str] = field(default_factory=list)
    returns: JsxElement | None = None
    export: str = "export"
    """``""``, ``"export"`` or ``"export default"``."""

    def render(self) -> str:
        prefix = f"{self.export} " if self.export else ""
        lines = [f"{prefix}function {self.name}({self.params}) {{"]
        lines.extend(INDENT + statement for statement in self.statements)
        if self.returns is not None:
            lines.append(f"{INDENT}return (")
            lines.append(self.returns.render(2))
            lines.append(f"{INDENT})")
        lines.append("}")
        return "\n".join(lines)


Declaration = Union[RawText, ConstDecl, InterfaceDecl, FunctionDecl]


@dataclass
class ComponentModule:
    """Ordered declarations of a generated ``.tsx`` file."""

    file_name: str
    declarations: list[Declaration] = field(default_factory=list)

    def add(self, declaration: Declaration) -> Declaration:
        self.declarations.append(declaration)
        return declaration

    def get_interface(self, name: str) -> InterfaceDecl | None:
        return self._find(InterfaceDecl, name)

    def get_function(self, name: str) -> FunctionDecl | None:
        return self._find(FunctionDecl, name)

    def get_variable(self, name: str) -> ConstDecl | None:
        return self._find(ConstDecl, name)

    def render(self) -> str:
        return "\n\n".join(d.render() for d in self.declarations) + "\n"

    def _find(self, kind: type, name: str):
        for declaration in self.declarations:
            if isinstance(declaration, kind) and declaration.name == name:
                return declaration
        return None
