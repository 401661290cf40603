"""
Symbol binding and name resolution over tree-sitter syntax trees.

File-level and namespace-level declarations are bound eagerly when a file is
first bound. Everything below that (function bodies, parameters, type
parameters, members of classes, interfaces, type literals and object literals)
is bound on first use and cached by declaration node.
"""

import itertools
import logging
from enum import IntFlag
from typing import TYPE_CHECKING, Any

from .syntax import SyntaxNode

if TYPE_CHECKING:
    from .project import Project, SourceFile

logger = logging.getLogger(__name__)

_symbol_ids = itertools.count(1)


class SymbolFlags(IntFlag):
    NONE = 0
    FUNCTION_SCOPED_VARIABLE = 1 << 0
    BLOCK_SCOPED_VARIABLE = 1 << 1
    PROPERTY = 1 << 2
    ENUM_MEMBER = 1 << 3
    FUNCTION = 1 << 4
    CLASS = 1 << 5
    INTERFACE = 1 << 6
    CONST_ENUM = 1 << 7
    REGULAR_ENUM = 1 << 8
    VALUE_MODULE = 1 << 9
    NAMESPACE_MODULE = 1 << 10
    TYPE_LITERAL = 1 << 11
    OBJECT_LITERAL = 1 << 12
    METHOD = 1 << 13
    CONSTRUCTOR = 1 << 14
    GET_ACCESSOR = 1 << 15
    SET_ACCESSOR = 1 << 16
    SIGNATURE = 1 << 17
    TYPE_PARAMETER = 1 << 18
    TYPE_ALIAS = 1 << 19
    ALIAS = 1 << 20
    OPTIONAL = 1 << 21
    TRANSIENT = 1 << 22
    PARAMETER = 1 << 23

    ENUM = REGULAR_ENUM | CONST_ENUM
    VARIABLE = FUNCTION_SCOPED_VARIABLE | BLOCK_SCOPED_VARIABLE
    ACCESSOR = GET_ACCESSOR | SET_ACCESSOR
    MODULE = VALUE_MODULE | NAMESPACE_MODULE
    VALUE = (
        VARIABLE
        | PROPERTY
        | ENUM_MEMBER
        | OBJECT_LITERAL
        | FUNCTION
        | CLASS
        | ENUM
        | VALUE_MODULE
        | METHOD
        | ACCESSOR
    )
    TYPE = CLASS | INTERFACE | ENUM | ENUM_MEMBER | TYPE_LITERAL | TYPE_PARAMETER | TYPE_ALIAS
    NAMESPACE = VALUE_MODULE | NAMESPACE_MODULE | ENUM


class Symbol:
    """A named entity with one or more declarations."""

    def __init__(self, name: str, flags: SymbolFlags, parent: "Symbol | None" = None):
        self.id = next(_symbol_ids)
        self.name = name
        self.flags = flags
        self.parent = parent
        self.declarations: list[SyntaxNode] = []
        self.value_declaration: SyntaxNode | None = None
        self.members: dict[str, Symbol] = {}
        self.exports: dict[str, Symbol] = {}
        self.members_bound = False
        self.is_exported = False
        self.star_exports: list = []  # (specifier, source file) pairs of `export *` statements
        # Import and re-export aliases
        self.alias_module: str | None = None  # Module specifier, None for local aliases
        self.alias_name: str | None = None  # Exported name, "*" for namespace imports
        self.alias_file: SourceFile | None = None
        # Transient (instantiated or synthesized) symbols
        self.target: Symbol | None = None
        self.mapper: Any = None
        self.type: Any = None
        self.declared_type: Any = None
        self.readonly: bool | None = None
        self.key_type: Any = None
        # Lazily computed type of a synthesized member (mapped, union and intersection properties)
        self.origin: Any = None

    @property
    def is_optional(self) -> bool:
        return bool(self.flags & SymbolFlags.OPTIONAL)

    @property
    def is_rest(self) -> bool:
        declaration = self.value_declaration
        return declaration is not None and declaration.child_of_kind("rest_pattern") is not None

    @property
    def has_initializer(self) -> bool:
        declaration = self.value_declaration
        return declaration is not None and declaration.child("value") is not None

    def add_declaration(self, node: SyntaxNode, flags: SymbolFlags) -> None:
        self.flags |= flags
        if node not in self.declarations:
            self.declarations.append(node)
        if flags & SymbolFlags.VALUE and (
            self.value_declaration is None
            or (self.value_declaration.kind in AMBIENT_VALUE_KINDS and node.kind not in AMBIENT_VALUE_KINDS)
        ):
            self.value_declaration = node

    def __repr__(self) -> str:
        return f"Symbol({self.name!r}, {self.flags!r})"


# Declarations that only describe a value (overloads, signatures)
AMBIENT_VALUE_KINDS = frozenset({"function_signature", "method_signature", "abstract_method_signature"})

FUNCTION_LIKE_KINDS = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
        "method_signature",
        "abstract_method_signature",
        "call_signature",
        "construct_signature",
        "function_type",
        "constructor_type",
    }
)

TYPE_PARAMETER_OWNER_KINDS = FUNCTION_LIKE_KINDS | {
    "class_declaration",
    "abstract_class_declaration",
    "class",
    "interface_declaration",
    "type_alias_declaration",
}

CLASS_KINDS = frozenset({"class_declaration", "abstract_class_declaration", "class"})
NAMESPACE_KINDS = frozenset({"internal_module", "module"})
VARIABLE_STATEMENT_KINDS = frozenset({"lexical_declaration", "variable_declaration"})
OBJECT_TYPE_BODY_KINDS = frozenset({"object_type", "interface_body"})


def strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] in "\"'`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def get_property_name(name_node: SyntaxNode | None) -> str | None:
    """Name of a property-like declaration, unquoting string and computed names."""
    if name_node is None:
        return None
    if name_node.kind == "string":
        return strip_quotes(name_node.text)
    if name_node.kind == "computed_property_name":
        inner = name_node.first_named_child
        if inner is not None and inner.kind == "string":
            return strip_quotes(inner.text)
        return "__computed"
    return name_node.text


def get_declaration_name(node: SyntaxNode) -> str | None:
    name_node = node.child("name")
    if name_node is None:
        return None
    if node.kind in ("method_definition", "method_signature", "abstract_method_signature", "property_signature", "public_field_definition", "pair", "enum_assignment"):
        return get_property_name(name_node)
    return name_node.text


def unwrap_namespace(node: SyntaxNode) -> SyntaxNode | None:
    """Namespace declarations may be wrapped in an expression statement."""
    if node.kind in NAMESPACE_KINDS:
        return node
    if node.kind == "expression_statement":
        inner = node.first_named_child
        if inner is not None and inner.kind in NAMESPACE_KINDS:
            return inner
    return None


def is_ambient_context(node: SyntaxNode) -> bool:
    """Whether a declaration sits inside ``declare`` or a declaration file."""
    if node.source_file.is_declaration_file:
        return True
    return node.find_ancestor("ambient_declaration") is not None


class Binder:
    """Creates symbols for declarations and resolves names through scopes."""

    def __init__(self, project: "Project"):
        self.project = project
        self.globals: dict[str, Symbol] = {}
        self.ambient_modules: dict[str, Symbol] = {}
        self._node_symbols: dict[tuple, Symbol] = {}
        self._block_locals: dict[tuple, dict[str, Symbol]] = {}
        self._literal_symbols: dict[tuple, Symbol] = {}

    # File binding

    def bind_all(self) -> None:
        for source_file in self.project.source_files:
            self.bind_file(source_file)

    def bind_file(self, source_file: "SourceFile") -> None:
        if source_file.bound:
            return
        source_file.bound = True
        root = source_file.root
        source_file.is_external_module = any(
            child.kind in ("import_statement", "export_statement") for child in root.named_children
        )
        module_symbol = Symbol(f'"{source_file.path}"', SymbolFlags.VALUE_MODULE)
        module_symbol.declarations.append(root)
        source_file.symbol = module_symbol
        source_file.locals = {}
        self._bind_statements(root, source_file.locals, module_symbol.exports, module_symbol, module_symbol)
        self._block_locals[root.key] = source_file.locals
        if not source_file.is_external_module:
            for name, symbol in source_file.locals.items():
                self._merge_into(self.globals, name, symbol)

    def _merge_into(self, table: dict[str, Symbol], name: str, symbol: Symbol) -> None:
        existing = table.get(name)
        if existing is None or existing is symbol:
            table[name] = symbol
            return
        for declaration in symbol.declarations:
            existing.add_declaration(declaration, symbol.flags)
            self._node_symbols[declaration.key] = existing
        existing.exports.update(symbol.exports)

    def _declare(
        self,
        table: dict[str, Symbol],
        name: str,
        node: SyntaxNode,
        flags: SymbolFlags,
        parent: Symbol | None,
    ) -> Symbol:
        symbol = table.get(name)
        if symbol is None or symbol.flags & SymbolFlags.ALIAS:
            symbol = Symbol(name, SymbolFlags.NONE, parent)
            table[name] = symbol
        symbol.add_declaration(node, flags)
        self._node_symbols[node.key] = symbol
        return symbol

    def _bind_statements(
        self,
        container: SyntaxNode,
        locals_: dict[str, Symbol],
        exports: dict[str, Symbol] | None,
        parent: Symbol | None,
        module_symbol: Symbol | None = None,
        exported_by_default: bool = False,
    ) -> None:
        clause_exports: list[tuple[str, str]] = []
        for statement in container.named_children:
            self._bind_statement(
                statement, locals_, exports, parent, module_symbol, exported_by_default, clause_exports
            )
        for local_name, exported_name in clause_exports:
            local = locals_.get(local_name)
            if local is None or exports is None:
                continue
            local.is_exported = True
            if exported_name not in exports:
                exports[exported_name] = local

    def _bind_statement(
        self,
        statement: SyntaxNode,
        locals_: dict[str, Symbol],
        exports: dict[str, Symbol] | None,
        parent: Symbol | None,
        module_symbol: Symbol | None,
        exported: bool,
        clause_exports: list[tuple[str, str]],
    ) -> None:
        kind = statement.kind
        if kind == "export_statement":
            self._bind_export(statement, locals_, exports, parent, module_symbol, clause_exports)
        elif kind == "import_statement":
            self._bind_import(statement, locals_)
        elif kind == "ambient_declaration":
            self._bind_ambient(statement, locals_, exports, parent, module_symbol, exported, clause_exports)
        else:
            self._bind_declaration(statement, locals_, exports if exported else None, parent)

    def _bind_export(
        self,
        statement: SyntaxNode,
        locals_: dict[str, Symbol],
        exports: dict[str, Symbol] | None,
        parent: Symbol | None,
        module_symbol: Symbol | None,
        clause_exports: list[tuple[str, str]],
    ) -> None:
        is_default = statement.has_token("default")
        declaration = statement.child("declaration")
        if declaration is not None:
            if declaration.kind == "ambient_declaration":
                self._bind_ambient(declaration, locals_, exports, parent, module_symbol, True, clause_exports)
                return
            symbols = self._bind_declaration(declaration, locals_, exports, parent)
            if is_default and symbols and exports is not None:
                exports["default"] = symbols[0]
            return

        value = statement.child("value")
        if value is not None and is_default:
            if value.kind == "identifier":
                clause_exports.append((value.text, "default"))
            elif exports is not None:
                symbol = Symbol("default", SymbolFlags.NONE, parent)
                symbol.add_declaration(statement, SymbolFlags.BLOCK_SCOPED_VARIABLE)
                symbol.is_exported = True
                self._node_symbols[statement.key] = symbol
                exports["default"] = symbol
            return

        source = statement.child("source")
        specifier = strip_quotes(source.text) if source is not None else None
        export_clause = statement.child_of_kind("export_clause")
        if export_clause is not None:
            for export_specifier in export_clause.children_of_kind("export_specifier"):
                name_node = export_specifier.child("name")
                alias_node = export_specifier.child("alias")
                if name_node is None:
                    continue
                local_name = strip_quotes(name_node.text)
                exported_name = strip_quotes(alias_node.text) if alias_node is not None else local_name
                if specifier is not None:
                    if exports is not None:
                        alias = self._create_alias(exported_name, export_specifier, specifier, local_name)
                        alias.is_exported = True
                        exports[exported_name] = alias
                else:
                    clause_exports.append((local_name, exported_name))
            return

        if specifier is not None and module_symbol is not None:
            namespace_export = statement.child_of_kind("namespace_export")
            if namespace_export is not None:
                name_node = namespace_export.first_named_child
                if name_node is not None and exports is not None:
                    alias = self._create_alias(strip_quotes(name_node.text), namespace_export, specifier, "*")
                    alias.is_exported = True
                    exports[alias.name] = alias
            else:
                module_symbol.star_exports.append((specifier, statement.source_file))

    def _bind_import(self, statement: SyntaxNode, locals_: dict[str, Symbol]) -> None:
        source = statement.child("source")
        if source is None:
            return
        specifier = strip_quotes(source.text)
        import_clause = statement.child_of_kind("import_clause")
        if import_clause is None:
            return
        for child in import_clause.named_children:
            if child.kind == "identifier":
                locals_[child.text] = self._create_alias(child.text, child, specifier, "default")
            elif child.kind == "namespace_import":
                name_node = child.first_named_child
                if name_node is not None:
                    locals_[name_node.text] = self._create_alias(name_node.text, child, specifier, "*")
            elif child.kind == "named_imports":
                for import_specifier in child.children_of_kind("import_specifier"):
                    name_node = import_specifier.child("name")
                    alias_node = import_specifier.child("alias")
                    if name_node is None:
                        continue
                    imported_name = strip_quotes(name_node.text)
                    local_name = alias_node.text if alias_node is not None else imported_name
                    locals_[local_name] = self._create_alias(local_name, import_specifier, specifier, imported_name)

    def _create_alias(self, name: str, node: SyntaxNode, specifier: str, imported_name: str) -> Symbol:
        alias = Symbol(name, SymbolFlags.ALIAS)
        alias.declarations.append(node)
        alias.alias_module = specifier
        alias.alias_name = imported_name
        alias.alias_file = node.source_file
        self._node_symbols[node.key] = alias
        return alias

    def _bind_ambient(
        self,
        statement: SyntaxNode,
        locals_: dict[str, Symbol],
        exports: dict[str, Symbol] | None,
        parent: Symbol | None,
        module_symbol: Symbol | None,
        exported: bool,
        clause_exports: list[tuple[str, str]],
    ) -> None:
        if statement.has_token("global"):
            block = statement.child_of_kind("statement_block")
            if block is not None:
                global_locals: dict[str, Symbol] = {}
                self._bind_statements(block, global_locals, None, None)
                for name, symbol in global_locals.items():
                    self._merge_into(self.globals, name, symbol)
            return
        for child in statement.named_children:
            namespace = unwrap_namespace(child)
            if namespace is not None:
                name_node = namespace.child("name")
                if name_node is not None and name_node.kind == "string":
                    self._bind_ambient_module(namespace, strip_quotes(name_node.text))
                    continue
            self._bind_declaration(child, locals_, exports if exported else None, parent)

    def _bind_ambient_module(self, node: SyntaxNode, specifier: str) -> None:
        symbol = self.ambient_modules.get(specifier)
        if symbol is None:
            symbol = Symbol(f'"{specifier}"', SymbolFlags.VALUE_MODULE)
            self.ambient_modules[specifier] = symbol
        symbol.declarations.append(node)
        body = node.child("body")
        if body is not None:
            body_locals = self._block_locals.setdefault(body.key, {})
            self._bind_statements(body, body_locals, symbol.exports, symbol, symbol, exported_by_default=True)

    def _bind_declaration(
        self,
        node: SyntaxNode,
        locals_: dict[str, Symbol],
        exports: dict[str, Symbol] | None,
        parent: Symbol | None,
    ) -> list[Symbol]:
        """Bind one declaration statement into ``locals_`` (and ``exports`` when exported)."""
        kind = node.kind
        flags = SymbolFlags.NONE
        if kind in ("function_declaration", "generator_function_declaration", "function_signature"):
            flags = SymbolFlags.FUNCTION
        elif kind in ("class_declaration", "abstract_class_declaration"):
            flags = SymbolFlags.CLASS
        elif kind == "interface_declaration":
            flags = SymbolFlags.INTERFACE
        elif kind == "type_alias_declaration":
            flags = SymbolFlags.TYPE_ALIAS
        elif kind == "enum_declaration":
            flags = SymbolFlags.CONST_ENUM if node.has_token("const") else SymbolFlags.REGULAR_ENUM
        elif kind in VARIABLE_STATEMENT_KINDS:
            return self._bind_variables(node, locals_, exports, parent)
        elif unwrap_namespace(node) is not None:
            return [self._bind_namespace(unwrap_namespace(node), locals_, exports, parent)]
        else:
            return []

        name = get_declaration_name(node)
        if name is None:
            name = "default"
        symbol = self._declare(locals_, name, node, flags, parent)
        if exports is not None:
            symbol.is_exported = True
            exports[name] = symbol
        return [symbol]

    def _bind_variables(
        self,
        node: SyntaxNode,
        locals_: dict[str, Symbol],
        exports: dict[str, Symbol] | None,
        parent: Symbol | None,
    ) -> list[Symbol]:
        flags = SymbolFlags.FUNCTION_SCOPED_VARIABLE if node.kind == "variable_declaration" else SymbolFlags.BLOCK_SCOPED_VARIABLE
        symbols = []
        for declarator in node.children_of_kind("variable_declarator"):
            name_node = declarator.child("name")
            if name_node is None:
                continue
            if name_node.kind == "identifier":
                targets = [(name_node.text, declarator)]
            else:
                targets = [
                    (identifier.text, identifier)
                    for identifier in name_node.walk()
                    if identifier.kind in ("identifier", "shorthand_property_identifier_pattern")
                ]
            for name, declaration in targets:
                symbol = self._declare(locals_, name, declaration, flags, parent)
                if exports is not None:
                    symbol.is_exported = True
                    exports[name] = symbol
                symbols.append(symbol)
        return symbols

    def _bind_namespace(
        self,
        node: SyntaxNode,
        locals_: dict[str, Symbol],
        exports: dict[str, Symbol] | None,
        parent: Symbol | None,
    ) -> Symbol:
        name_node = node.child("name")
        names = name_node.text.split(".") if name_node is not None else ["__namespace"]
        flags = SymbolFlags.NAMESPACE_MODULE | SymbolFlags.VALUE_MODULE
        symbol = self._declare(locals_, names[0], node, flags, parent)
        if exports is not None:
            symbol.is_exported = True
            exports[names[0]] = symbol
        # ``namespace A.B {}`` declares B inside A
        for nested_name in names[1:]:
            inner_locals = self._block_locals.setdefault(("namespace", symbol.id), {})
            nested = self._declare(inner_locals, nested_name, node, flags, symbol)
            nested.is_exported = True
            symbol.exports[nested_name] = nested
            symbol = nested
        body = node.child("body")
        if body is not None:
            body_locals = self._block_locals.setdefault(body.key, {})
            self._bind_statements(
                body, body_locals, symbol.exports, symbol, None, exported_by_default=is_ambient_context(node)
            )
            self._node_symbols[body.key] = symbol
        return symbol

    # Lazily bound scopes

    def get_block_locals(self, block: SyntaxNode) -> dict[str, Symbol]:
        """Declarations of a program, namespace body or statement block."""
        cached = self._block_locals.get(block.key)
        if cached is not None:
            return cached
        if block.kind == "program":
            self.bind_file(block.source_file)
            return block.source_file.locals
        parent = block.parent
        if parent is not None and unwrap_namespace(parent) is not None:
            # Namespace bodies are bound together with their enclosing container
            self.get_symbol_of_declaration(parent)
            cached = self._block_locals.get(block.key)
            if cached is not None:
                return cached
        locals_: dict[str, Symbol] = {}
        self._block_locals[block.key] = locals_
        self._bind_statements(block, locals_, None, None)
        return locals_

    def get_namespace_symbol_of_body(self, body: SyntaxNode) -> Symbol | None:
        return self._node_symbols.get(body.key)

    def get_symbol_of_declaration(self, node: SyntaxNode) -> Symbol | None:
        """Symbol created for a declaration node, binding its container on demand."""
        symbol = self._node_symbols.get(node.key)
        if symbol is not None:
            return symbol
        kind = node.kind
        if kind == "type_parameter":
            return self._get_simple_symbol(node, SymbolFlags.TYPE_PARAMETER, node.child("name"))
        if kind == "infer_type":
            return self._get_simple_symbol(node, SymbolFlags.TYPE_PARAMETER, node.child_of_kind("type_identifier"))
        if kind == "mapped_type_clause":
            return self._get_simple_symbol(node, SymbolFlags.TYPE_PARAMETER, node.child("name"))
        if kind in ("required_parameter", "optional_parameter"):
            return self._get_parameter_symbol(node)
        if kind in ("object_type", "function_type", "constructor_type"):
            return self.get_literal_symbol(node, "__type", SymbolFlags.TYPE_LITERAL)
        if kind == "object":
            return self.get_literal_symbol(node, "__object", SymbolFlags.OBJECT_LITERAL)
        if kind in ("arrow_function", "function_expression", "function", "generator_function"):
            return self.get_literal_symbol(node, "__function", SymbolFlags.FUNCTION)
        if kind == "class":
            return self.get_literal_symbol(node, "__class", SymbolFlags.CLASS)

        owner = node.parent
        if owner is None:
            return None
        if owner.kind == "class_body" or owner.kind in OBJECT_TYPE_BODY_KINDS or owner.kind in ("enum_body", "object"):
            owner_symbol = self._get_member_owner_symbol(owner)
            if owner_symbol is not None:
                self.get_members(owner_symbol)
            return self._node_symbols.get(node.key)
        container = self._find_statement_container(node)
        if container is None:
            return None
        self.get_block_locals(container)
        return self._node_symbols.get(node.key)

    def _find_statement_container(self, node: SyntaxNode) -> SyntaxNode | None:
        for ancestor in node.ancestors():
            if ancestor.kind in ("program", "statement_block"):
                return ancestor
        return None

    def _get_member_owner_symbol(self, body: SyntaxNode) -> Symbol | None:
        if body.kind == "object":
            return self.get_literal_symbol(body, "__object", SymbolFlags.OBJECT_LITERAL)
        if body.kind == "object_type" and (body.parent is None or body.parent.kind != "interface_declaration"):
            return self.get_literal_symbol(body, "__type", SymbolFlags.TYPE_LITERAL)
        declaration = body.parent
        if declaration is None:
            return None
        return self.get_symbol_of_declaration(declaration)

    def _get_simple_symbol(self, node: SyntaxNode, flags: SymbolFlags, name_node: SyntaxNode | None) -> Symbol:
        symbol = Symbol(name_node.text if name_node is not None else "__missing", flags)
        symbol.declarations.append(node)
        self._node_symbols[node.key] = symbol
        return symbol

    def _get_parameter_symbol(self, node: SyntaxNode) -> Symbol:
        pattern = node.child("pattern") or node.child("name")
        if pattern is None:
            name = "__param"
        elif pattern.kind == "rest_pattern":
            inner = pattern.first_named_child
            name = inner.text if inner is not None else "__rest"
        elif pattern.kind in ("identifier", "this"):
            name = pattern.text
        else:
            name = f"__{node.parent.named_children.index(node) if node.parent else 0}"
        flags = SymbolFlags.FUNCTION_SCOPED_VARIABLE | SymbolFlags.PARAMETER
        if node.kind == "optional_parameter" or node.child("value") is not None:
            flags |= SymbolFlags.OPTIONAL
        symbol = Symbol(name, SymbolFlags.NONE)
        symbol.add_declaration(node, flags)
        self._node_symbols[node.key] = symbol
        return symbol

    def get_literal_symbol(self, node: SyntaxNode, name: str, flags: SymbolFlags) -> Symbol:
        """Anonymous symbol for a type literal, object literal, function expression or class expression."""
        symbol = self._literal_symbols.get(node.key)
        if symbol is None:
            symbol = Symbol(name, SymbolFlags.NONE)
            symbol.add_declaration(node, flags)
            self._literal_symbols[node.key] = symbol
            self._node_symbols[node.key] = symbol
        return symbol

    # Members

    def get_members(self, symbol: Symbol) -> dict[str, Symbol]:
        """Instance members; static class members and enum members land in ``exports``."""
        if symbol.members_bound or symbol.flags & SymbolFlags.TRANSIENT:
            return symbol.members
        symbol.members_bound = True
        for declaration in symbol.declarations:
            kind = declaration.kind
            if kind == "interface_declaration":
                body = declaration.child("body")
                if body is not None:
                    self._bind_type_members(body, symbol)
            elif kind == "object_type":
                self._bind_type_members(declaration, symbol)
            elif kind in CLASS_KINDS:
                body = declaration.child("body")
                if body is not None:
                    self._bind_class_members(body, symbol)
            elif kind == "enum_declaration":
                body = declaration.child("body")
                if body is not None:
                    self._bind_enum_members(body, symbol)
            elif kind == "object":
                self._bind_object_literal_members(declaration, symbol)
            elif kind in ("function_type", "constructor_type"):
                name = "__new" if kind == "constructor_type" else "__call"
                self._declare(symbol.members, name, declaration, SymbolFlags.SIGNATURE, symbol)
        return symbol.members

    def _bind_type_members(self, body: SyntaxNode, symbol: Symbol) -> None:
        for member in body.named_children:
            kind = member.kind
            if kind == "property_signature":
                flags = SymbolFlags.PROPERTY
                if member.has_token("?"):
                    flags |= SymbolFlags.OPTIONAL
                name = get_declaration_name(member)
                if name is not None:
                    self._declare(symbol.members, name, member, flags, symbol)
            elif kind == "method_signature":
                name = get_declaration_name(member)
                if name is None:
                    continue
                if member.has_token("get"):
                    flags = SymbolFlags.GET_ACCESSOR
                elif member.has_token("set"):
                    flags = SymbolFlags.SET_ACCESSOR
                else:
                    flags = SymbolFlags.METHOD
                if member.has_token("?"):
                    flags |= SymbolFlags.OPTIONAL
                self._declare(symbol.members, name, member, flags, symbol)
            elif kind == "call_signature":
                self._declare(symbol.members, "__call", member, SymbolFlags.SIGNATURE, symbol)
            elif kind == "construct_signature":
                self._declare(symbol.members, "__new", member, SymbolFlags.SIGNATURE, symbol)
            elif kind == "index_signature":
                if member.child_of_kind("mapped_type_clause") is None:
                    self._declare(symbol.members, "__index", member, SymbolFlags.SIGNATURE, symbol)

    def _bind_class_members(self, body: SyntaxNode, symbol: Symbol) -> None:
        for member in body.named_children:
            kind = member.kind
            if kind == "decorator":
                continue
            is_static = member.has_token("static")
            table = symbol.exports if is_static else symbol.members
            name = get_declaration_name(member)
            if kind in ("method_definition", "method_signature", "abstract_method_signature"):
                if name is None:
                    continue
                if name == "constructor" and not is_static:
                    self._declare(symbol.members, "__constructor", member, SymbolFlags.CONSTRUCTOR, symbol)
                    self._bind_parameter_properties(member, symbol)
                    continue
                if member.has_token("get"):
                    flags = SymbolFlags.GET_ACCESSOR
                elif member.has_token("set"):
                    flags = SymbolFlags.SET_ACCESSOR
                else:
                    flags = SymbolFlags.METHOD
                if member.has_token("?"):
                    flags |= SymbolFlags.OPTIONAL
                self._declare(table, name, member, flags, symbol)
            elif kind == "public_field_definition":
                if name is None:
                    continue
                flags = SymbolFlags.PROPERTY
                if member.has_token("?"):
                    flags |= SymbolFlags.OPTIONAL
                self._declare(table, name, member, flags, symbol)
            elif kind == "index_signature":
                self._declare(table, "__index", member, SymbolFlags.SIGNATURE, symbol)

    def _bind_parameter_properties(self, constructor: SyntaxNode, symbol: Symbol) -> None:
        parameters = constructor.child("parameters")
        if parameters is None:
            return
        for parameter in parameters.named_children:
            if parameter.kind not in ("required_parameter", "optional_parameter"):
                continue
            if parameter.child_of_kind("accessibility_modifier") is None and not parameter.has_token("readonly"):
                continue
            pattern = parameter.child("pattern")
            if pattern is None or pattern.kind != "identifier":
                continue
            flags = SymbolFlags.PROPERTY
            if parameter.kind == "optional_parameter":
                flags |= SymbolFlags.OPTIONAL
            # Not registered by node: the parameter keeps its own symbol
            member = Symbol(pattern.text, SymbolFlags.NONE, symbol)
            member.add_declaration(parameter, flags)
            symbol.members[pattern.text] = member

    def _bind_enum_members(self, body: SyntaxNode, symbol: Symbol) -> None:
        for member in body.named_children:
            if member.kind == "enum_assignment":
                name = get_property_name(member.child("name"))
            elif member.kind in ("property_identifier", "string", "identifier"):
                name = get_property_name(member)
            else:
                continue
            if name is not None:
                self._declare(symbol.exports, name, member, SymbolFlags.ENUM_MEMBER, symbol)

    def _bind_object_literal_members(self, node: SyntaxNode, symbol: Symbol) -> None:
        for member in node.named_children:
            kind = member.kind
            if kind == "pair":
                name = get_property_name(member.child("key"))
                if name is not None:
                    self._declare(symbol.members, name, member, SymbolFlags.PROPERTY, symbol)
            elif kind == "shorthand_property_identifier":
                self._declare(symbol.members, member.text, member, SymbolFlags.PROPERTY, symbol)
            elif kind == "method_definition":
                name = get_declaration_name(member)
                if name is None:
                    continue
                if member.has_token("get"):
                    flags = SymbolFlags.GET_ACCESSOR
                elif member.has_token("set"):
                    flags = SymbolFlags.SET_ACCESSOR
                else:
                    flags = SymbolFlags.METHOD
                self._declare(symbol.members, name, member, flags, symbol)

    # Name resolution

    def resolve_name(self, location: SyntaxNode, name: str, meaning: SymbolFlags) -> Symbol | None:
        """
        Look ``name`` up from ``location`` outwards: type parameters, ``infer``
        declarations, mapped type keys, parameters, block and namespace locals,
        the file, and finally globals.
        """
        previous: SyntaxNode | None = None
        node: SyntaxNode | None = location
        while node is not None:
            kind = node.kind
            if meaning & SymbolFlags.TYPE:
                if kind in TYPE_PARAMETER_OWNER_KINDS:
                    type_parameters = node.child("type_parameters")
                    if type_parameters is not None:
                        for type_parameter in type_parameters.children_of_kind("type_parameter"):
                            name_node = type_parameter.child("name")
                            if name_node is not None and name_node.text == name:
                                return self.get_symbol_of_declaration(type_parameter)
                elif kind == "conditional_type" and previous is not None and previous == node.child("consequence"):
                    extends_node = node.child("right")
                    if extends_node is not None:
                        for candidate in extends_node.walk():
                            if candidate.kind == "infer_type":
                                name_node = candidate.child_of_kind("type_identifier")
                                if name_node is not None and name_node.text == name:
                                    return self.get_symbol_of_declaration(candidate)
                elif kind == "index_signature":
                    clause = node.child_of_kind("mapped_type_clause")
                    if clause is not None:
                        name_node = clause.child("name")
                        if name_node is not None and name_node.text == name:
                            return self.get_symbol_of_declaration(clause)
            if meaning & SymbolFlags.VALUE and kind in FUNCTION_LIKE_KINDS:
                found = self._lookup_parameter(node, name)
                if found is not None:
                    return found
            if kind in ("program", "statement_block"):
                table = self.get_block_locals(node)
                found = self._lookup_in_table(table, name, meaning)
                if found is not None:
                    return found
                namespace = self.get_namespace_symbol_of_body(node) if kind == "statement_block" else None
                if namespace is not None:
                    found = self._lookup_in_table(namespace.exports, name, meaning)
                    if found is not None:
                        return found
            elif kind in CLASS_KINDS and meaning & SymbolFlags.VALUE:
                name_node = node.child("name")
                if kind == "class" and name_node is not None and name_node.text == name:
                    return self.get_symbol_of_declaration(node)
            previous = node
            node = node.parent
        return self._lookup_in_table(self.globals, name, meaning)

    def _lookup_parameter(self, function_node: SyntaxNode, name: str) -> Symbol | None:
        single = function_node.child("parameter")
        if single is not None and single.text == name:
            symbol = self._node_symbols.get(single.key)
            if symbol is None:
                symbol = Symbol(name, SymbolFlags.NONE)
                symbol.add_declaration(single, SymbolFlags.FUNCTION_SCOPED_VARIABLE | SymbolFlags.PARAMETER)
                self._node_symbols[single.key] = symbol
            return symbol
        parameters = function_node.child("parameters")
        if parameters is None:
            return None
        for parameter in parameters.named_children:
            if parameter.kind not in ("required_parameter", "optional_parameter"):
                continue
            symbol = self.get_symbol_of_declaration(parameter)
            if symbol is not None and symbol.name == name:
                return symbol
        return None

    @staticmethod
    def _lookup_in_table(table: dict[str, Symbol], name: str, meaning: SymbolFlags) -> Symbol | None:
        symbol = table.get(name)
        if symbol is None:
            return None
        if symbol.flags & (meaning | SymbolFlags.ALIAS):
            return symbol
        return None
