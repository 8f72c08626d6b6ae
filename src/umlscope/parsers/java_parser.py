"""Java declaration reader using tree-sitter."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..logging import get_logger
from ..models.declaration import (
    CallExpression,
    FieldAccessExpression,
    ResolvedDeclaration,
    ResolvedField,
    ResolvedMethod,
    TypeReference,
)
from .base import BaseDeclarationReader
from .type_resolver import ProjectTypeIndex, ResolutionError, TypeResolver

logger = get_logger(__name__)

TYPE_DECLARATIONS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
}
NESTED_TYPE_DECLARATIONS = set(TYPE_DECLARATIONS) | {
    "record_declaration",
    "annotation_type_declaration",
}
BODY_TYPES = ("class_body", "interface_body", "enum_body", "annotation_type_body")
FIELD_DECLARATIONS = ("field_declaration", "constant_declaration")
VISIBILITY_MODIFIERS = ("public", "private", "protected")


@dataclass
class _CompilationUnit:
    """One parsed file plus what the first pass learned about it."""

    path: Path
    root: object
    package: str = ""
    imports: list[str] = field(default_factory=list)
    wildcard_imports: list[str] = field(default_factory=list)


@dataclass
class _MethodScope:
    """Names visible inside one method body, mapped to their declared types."""

    owner: str
    superclass: Optional[str]
    fields: dict[str, str]
    parameters: dict[str, str] = field(default_factory=dict)
    locals: dict[str, str] = field(default_factory=dict)

    def declared_type(self, name: str) -> Optional[str]:
        for names in (self.locals, self.parameters, self.fields):
            if name in names:
                return names[name]
        return None


def _text(node) -> str:
    return node.text.decode("utf-8") if node is not None else ""


def _walk(node) -> Iterator:
    """Pre-order traversal in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _child_of_type(node, *types: str):
    for child in node.children:
        if child.type in types:
            return child
    return None


def _visibility(node) -> str:
    modifiers = _child_of_type(node, "modifiers")
    if modifiers is None:
        return ""
    for child in modifiers.children:
        if child.type in VISIBILITY_MODIFIERS:
            return child.type
    return ""


class JavaDeclarationReader(BaseDeclarationReader):
    """Reads Java sources into resolved declarations using tree-sitter.

    Files are read in two passes: the first indexes every type the project
    declares, the second reads the first top-level type of each file and
    resolves its references against that index.
    """

    def __init__(self):
        self._parser = None
        self._language = None

    @property
    def language(self) -> str:
        return "java"

    @property
    def file_extensions(self) -> list[str]:
        return [".java"]

    def _get_parser(self):
        """Lazy initialization of tree-sitter parser."""
        if self._parser is None:
            try:
                import tree_sitter_java as tsjava
                from tree_sitter import Language, Parser

                self._language = Language(tsjava.language())
                self._parser = Parser(self._language)
            except ImportError as e:
                raise ImportError(
                    "tree-sitter-java is required. Install with: pip install tree-sitter-java"
                ) from e
        return self._parser

    def read_files(self, file_paths: Iterable[Path]) -> list[ResolvedDeclaration]:
        units = [unit for unit in map(self._parse_unit, file_paths) if unit is not None]

        index = ProjectTypeIndex()
        for unit in units:
            index.add_all(self._declared_type_names(unit))
        logger.debug("Project types indexed", extra={"type_count": len(index)})

        declarations = []
        for unit in units:
            declaration = self._read_declaration(unit, index)
            if declaration is not None:
                declarations.append(declaration)
        return declarations

    def read_file(self, file_path: Path) -> Optional[ResolvedDeclaration]:
        """Read a single file, resolving only against its own types."""
        declarations = self.read_files([file_path])
        return declarations[0] if declarations else None

    # ------------------------------------------------------------------
    # First pass: parsing and type index
    # ------------------------------------------------------------------

    def _parse_unit(self, file_path: Path) -> Optional[_CompilationUnit]:
        file_path = Path(file_path)
        try:
            source = file_path.read_bytes()
            source.decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Skipping unreadable source file",
                extra={"file_path": str(file_path), "error": str(e)},
            )
            return None

        tree = self._get_parser().parse(source)
        if tree.root_node.has_error:
            logger.warning("Source file has syntax errors", extra={"file_path": str(file_path)})

        unit = _CompilationUnit(path=file_path, root=tree.root_node)
        for child in tree.root_node.named_children:
            if child.type == "package_declaration":
                name = _child_of_type(child, "scoped_identifier", "identifier")
                unit.package = _text(name)
            elif child.type == "import_declaration":
                if _child_of_type(child, "static") is not None:
                    continue
                name = _text(_child_of_type(child, "scoped_identifier", "identifier"))
                if _child_of_type(child, "asterisk") is not None:
                    unit.wildcard_imports.append(name)
                elif name:
                    unit.imports.append(name)
        return unit

    def _declared_type_names(self, unit: _CompilationUnit) -> list[str]:
        names = []
        prefix = f"{unit.package}." if unit.package else ""
        pending = [(child, prefix) for child in unit.root.named_children]
        while pending:
            node, outer = pending.pop()
            if node.type not in NESTED_TYPE_DECLARATIONS:
                continue
            qualified = outer + _text(node.child_by_field_name("name"))
            names.append(qualified)
            body = _child_of_type(node, *BODY_TYPES)
            for member in self._body_members(body):
                pending.append((member, qualified + "."))
        return names

    def _body_members(self, body) -> list:
        if body is None:
            return []
        members = []
        for child in body.named_children:
            if child.type == "enum_body_declarations":
                members.extend(child.named_children)
            else:
                members.append(child)
        return members

    # ------------------------------------------------------------------
    # Second pass: declarations
    # ------------------------------------------------------------------

    def _read_declaration(
        self, unit: _CompilationUnit, index: ProjectTypeIndex
    ) -> Optional[ResolvedDeclaration]:
        type_node = next(
            (c for c in unit.root.named_children if c.type in TYPE_DECLARATIONS), None
        )
        if type_node is None:
            logger.debug("No type declaration found", extra={"file_path": str(unit.path)})
            return None

        resolver = TypeResolver(index, unit.package, unit.imports, unit.wildcard_imports)
        name = resolver.qualify(_text(type_node.child_by_field_name("name")))
        declaration = ResolvedDeclaration(
            name=name,
            kind=TYPE_DECLARATIONS[type_node.type],
            file_path=str(unit.path),
        )

        superclass = type_node.child_by_field_name("superclass")
        if superclass is not None and superclass.named_children:
            declaration.supertypes.append(
                self._type_reference(superclass.named_children[0], resolver)
            )
        extends_interfaces = _child_of_type(type_node, "extends_interfaces")
        if extends_interfaces is not None:
            declaration.supertypes.extend(
                self._type_references(extends_interfaces, resolver)
            )
        super_interfaces = _child_of_type(type_node, "super_interfaces")
        if super_interfaces is not None:
            declaration.interfaces.extend(self._type_references(super_interfaces, resolver))

        members = self._body_members(_child_of_type(type_node, *BODY_TYPES))
        field_types: dict[str, str] = {}
        for member in members:
            if member.type in FIELD_DECLARATIONS:
                for declared in self._read_fields(member, resolver):
                    declaration.fields.append(declared)
                    field_types[declared.name] = declared.type_name

        superclass_name = next(
            (t.resolved for t in declaration.supertypes if t.is_resolved), None
        )
        for member in members:
            if member.type == "method_declaration":
                scope = _MethodScope(name, superclass_name, field_types)
                declaration.methods.append(self._read_method(member, scope, resolver))

        logger.debug(
            "Declaration read",
            extra={
                "entity": name,
                "methods": len(declaration.methods),
                "fields": len(declaration.fields),
            },
        )
        return declaration

    def _type_reference(self, node, resolver: TypeResolver) -> TypeReference:
        raw = _text(node)
        try:
            return TypeReference(raw, resolver.resolve(raw))
        except ResolutionError as e:
            return TypeReference(raw, error=str(e))

    def _type_references(self, node, resolver: TypeResolver) -> list[TypeReference]:
        type_list = _child_of_type(node, "type_list")
        if type_list is None:
            return []
        return [self._type_reference(t, resolver) for t in type_list.named_children]

    def _read_fields(self, node, resolver: TypeResolver) -> list[ResolvedField]:
        type_name = _text(node.child_by_field_name("type"))
        visibility = _visibility(node)
        resolved_type = None
        error = None
        try:
            resolved_type = resolver.resolve(type_name)
        except ResolutionError as e:
            error = str(e)

        return [
            ResolvedField(
                _text(declarator.child_by_field_name("name")),
                type_name,
                resolved_type,
                visibility,
                error,
            )
            for declarator in node.children_by_field_name("declarator")
        ]

    def _read_method(self, node, scope: _MethodScope, resolver: TypeResolver) -> ResolvedMethod:
        method = ResolvedMethod(
            name=_text(node.child_by_field_name("name")),
            return_type=_text(node.child_by_field_name("type")) or "void",
            visibility=_visibility(node),
        )

        parameters = node.child_by_field_name("parameters")
        for parameter in parameters.named_children if parameters is not None else ():
            declared = self._parameter(parameter)
            if declared is None:
                continue
            parameter_name, parameter_type = declared
            method.parameter_types.append(parameter_type)
            scope.parameters[parameter_name] = parameter_type

        body = node.child_by_field_name("body")
        if body is None:
            return method

        nodes = list(_walk(body))
        for current in nodes:
            self._collect_local(current, scope)

        for current in nodes:
            if current.type == "method_invocation":
                method.calls.append(self._call_expression(current, scope, resolver))
            elif current.type == "field_access":
                method.field_accesses.append(self._field_access(current, scope, resolver))
        return method

    def _parameter(self, node) -> Optional[tuple[str, str]]:
        if node.type == "formal_parameter":
            return (
                _text(node.child_by_field_name("name")),
                _text(node.child_by_field_name("type")),
            )
        if node.type == "spread_parameter":
            declarator = _child_of_type(node, "variable_declarator")
            type_node = next(
                (c for c in node.named_children if c.type not in ("modifiers", "variable_declarator")),
                None,
            )
            if declarator is None or type_node is None:
                return None
            return _text(declarator.child_by_field_name("name")), _text(type_node) + "..."
        return None

    def _collect_local(self, node, scope: _MethodScope) -> None:
        if node.type == "local_variable_declaration":
            type_name = _text(node.child_by_field_name("type"))
            for declarator in node.children_by_field_name("declarator"):
                scope.locals[_text(declarator.child_by_field_name("name"))] = type_name
        elif node.type in ("enhanced_for_statement", "resource"):
            name = node.child_by_field_name("name")
            type_node = node.child_by_field_name("type")
            if name is not None and type_node is not None:
                scope.locals[_text(name)] = _text(type_node)
        elif node.type == "catch_formal_parameter":
            catch_type = _child_of_type(node, "catch_type")
            name = node.child_by_field_name("name")
            if catch_type is not None and name is not None:
                # Multi-catch resolves as its first alternative
                scope.locals[_text(name)] = _text(catch_type).split("|")[0]

    def _call_expression(
        self, node, scope: _MethodScope, resolver: TypeResolver
    ) -> CallExpression:
        call = CallExpression(
            method_name=_text(node.child_by_field_name("name")),
            line=node.start_point[0] + 1,
        )
        try:
            call.receiver_type = self._expression_type(
                node.child_by_field_name("object"), scope, resolver
            )
        except ResolutionError as e:
            call.error = str(e)
        return call

    def _field_access(
        self, node, scope: _MethodScope, resolver: TypeResolver
    ) -> FieldAccessExpression:
        access = FieldAccessExpression(
            field_name=_text(node.child_by_field_name("field")),
            line=node.start_point[0] + 1,
        )
        try:
            access.owner_type = self._expression_type(
                node.child_by_field_name("object"), scope, resolver
            )
        except ResolutionError as e:
            access.error = str(e)
        return access

    def _expression_type(self, node, scope: _MethodScope, resolver: TypeResolver) -> Optional[str]:
        """
        Static type of a receiver or scope expression.

        Handles ``this``, ``super``, names of locals, parameters and fields,
        ``this.field``, ``new T(...)``, casts and type names used for static
        access. Anything else (chained calls, array elements, ...) is None.
        """
        if node is None:
            return None

        if node.type == "this":
            return scope.owner
        if node.type == "super":
            return scope.superclass
        if node.type == "identifier":
            name = _text(node)
            declared = scope.declared_type(name)
            if declared is not None:
                return resolver.resolve(declared)
            if name[:1].isupper():
                return resolver.resolve(name)
            return None
        if node.type == "field_access":
            target = node.child_by_field_name("object")
            field_name = _text(node.child_by_field_name("field"))
            if target is not None and target.type == "this":
                declared = scope.fields.get(field_name)
                return resolver.resolve(declared) if declared else None
            if field_name[:1].isupper():
                return resolver.resolve(_text(node))
            return None
        if node.type == "object_creation_expression":
            return resolver.resolve(_text(node.child_by_field_name("type")))
        if node.type == "cast_expression":
            return resolver.resolve(_text(node.child_by_field_name("type")))
        if node.type == "parenthesized_expression" and node.named_children:
            return self._expression_type(node.named_children[0], scope, resolver)
        return None
