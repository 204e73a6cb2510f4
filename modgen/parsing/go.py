"""Tree-sitter powered parser for Go reference sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import ParseError
from ..logging import get_logger

GO_LANGUAGE = Language(tree_sitter_go.language())

_FUNCTION_NODES = {"function_declaration", "method_declaration"}
_PARAMETER_NODES = {"parameter_declaration", "variadic_parameter_declaration"}


@dataclass(frozen=True)
class ImportSpec:
    """One imported package, with its optional alias."""

    path: str
    name: Optional[str] = None

    def render(self) -> str:
        if self.name:
            return f'{self.name} "{self.path}"'
        return f'"{self.path}"'


@dataclass(frozen=True)
class FieldGroup:
    """Identifiers sharing one type expression, as written in a parameter list."""

    names: Tuple[str, ...]
    type_text: str


@dataclass(frozen=True)
class FunctionDecl:
    """Top-level function or method declaration."""

    name: str
    receiver: Optional[str]
    parameters: Tuple[FieldGroup, ...]
    results: Tuple[FieldGroup, ...]
    line: int


@dataclass
class SyntaxTree:
    """Declarations surfaced from one parsed Go file."""

    package: str
    imports: List[ImportSpec] = field(default_factory=list)
    functions: List[FunctionDecl] = field(default_factory=list)


class GoSourceParser:
    """Parses Go source text and surfaces imports and function declarations."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)
        self.logger = get_logger("parsing")

    def parse(self, source: str) -> SyntaxTree:
        source_bytes = source.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        root = tree.root_node
        if root.has_error:
            raise self._error_for(root)

        package = None
        imports: List[ImportSpec] = []
        functions: List[FunctionDecl] = []
        for child in root.named_children:
            if child.type == "package_clause":
                package = self._package_name(child, source_bytes)
            elif child.type == "import_declaration":
                imports.extend(self._collect_imports(child, source_bytes))
            elif child.type in _FUNCTION_NODES:
                functions.append(self._function_decl(child, source_bytes))

        if package is None:
            raise ParseError("failed to parse client code: missing package clause", line=1, column=1)

        self.logger.debug(
            "Parsed package %s: %d imports, %d functions", package, len(imports), len(functions)
        )
        return SyntaxTree(package=package, imports=imports, functions=functions)

    @staticmethod
    def _node_text(node: Node, source_bytes: bytes) -> str:
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _error_for(self, root: Node) -> ParseError:
        node = _first_error(root)
        if node is None:  # pragma: no cover - has_error implies an error node
            return ParseError("failed to parse client code")
        line, column = node.start_point[0] + 1, node.start_point[1] + 1
        if node.is_missing:
            problem = f"missing {node.type!r}"
        else:
            problem = "unexpected syntax"
        return ParseError(
            f"failed to parse client code: {problem} at line {line}, column {column}",
            line=line,
            column=column,
        )

    def _package_name(self, node: Node, source_bytes: bytes) -> str:
        for child in node.named_children:
            if child.type == "package_identifier":
                return self._node_text(child, source_bytes)
        return ""

    def _collect_imports(self, node: Node, source_bytes: bytes) -> Iterator[ImportSpec]:
        for child in node.named_children:
            if child.type == "import_spec":
                yield self._import_spec(child, source_bytes)
            elif child.type == "import_spec_list":
                for spec in child.named_children:
                    if spec.type == "import_spec":
                        yield self._import_spec(spec, source_bytes)

    def _import_spec(self, node: Node, source_bytes: bytes) -> ImportSpec:
        path_node = node.child_by_field_name("path")
        name_node = node.child_by_field_name("name")
        path = self._node_text(path_node, source_bytes).strip('"`') if path_node else ""
        name = self._node_text(name_node, source_bytes) if name_node else None
        return ImportSpec(path=path, name=name)

    def _function_decl(self, node: Node, source_bytes: bytes) -> FunctionDecl:
        name_node = node.child_by_field_name("name")
        receiver_node = node.child_by_field_name("receiver")
        params_node = node.child_by_field_name("parameters")
        result_node = node.child_by_field_name("result")

        parameters = self._field_groups(params_node, source_bytes) if params_node else ()
        if result_node is None:
            results: Tuple[FieldGroup, ...] = ()
        elif result_node.type == "parameter_list":
            results = self._field_groups(result_node, source_bytes)
        else:
            results = (FieldGroup(names=(), type_text=self._node_text(result_node, source_bytes)),)

        return FunctionDecl(
            name=self._node_text(name_node, source_bytes) if name_node else "",
            receiver=self._node_text(receiver_node, source_bytes) if receiver_node else None,
            parameters=parameters,
            results=results,
            line=node.start_point[0] + 1,
        )

    def _field_groups(self, node: Node, source_bytes: bytes) -> Tuple[FieldGroup, ...]:
        groups: List[FieldGroup] = []
        for child in node.named_children:
            if child.type not in _PARAMETER_NODES:
                continue
            type_node = child.child_by_field_name("type")
            type_text = self._node_text(type_node, source_bytes) if type_node else ""
            if child.type == "variadic_parameter_declaration":
                type_text = f"...{type_text}"
            names = tuple(
                self._node_text(name, source_bytes)
                for name in child.children_by_field_name("name")
            )
            groups.append(FieldGroup(names=names, type_text=type_text))
        return tuple(groups)


def _first_error(node: Node) -> Optional[Node]:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


__all__ = [
    "FieldGroup",
    "FunctionDecl",
    "GO_LANGUAGE",
    "GoSourceParser",
    "ImportSpec",
    "SyntaxTree",
]
