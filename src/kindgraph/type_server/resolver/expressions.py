"""
Type expression resolution.

``resolve_type_expression`` turns a semantic type, anchored at the syntax node
it was written at when one is known, into a ``TypeExpression`` kind. Dispatch
runs through ``TYPE_HANDLERS``: an ordered list of (predicate, handler) pairs
where the first matching predicate wins. Handlers recurse back into
``resolve_type_expression`` for their operands and may return ``None`` for
shapes that carry no information (an empty object literal, an empty tuple).
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from ..models.kind_models import (
    AnyKind,
    ArrayKind,
    BigIntKind,
    BooleanKind,
    CallSignatureKind,
    ConditionalTypeKind,
    ConstructSignatureKind,
    GetAccessorSignatureKind,
    IndexedAccessTypeKind,
    IndexSignatureKind,
    IndexSignatureParameterKind,
    InferTypeKind,
    IntersectionTypeKind,
    Kind,
    MappedTypeKind,
    MethodSignatureKind,
    NeverKind,
    NullKind,
    NumberKind,
    ObjectKind,
    PropertySignatureKind,
    SetAccessorSignatureKind,
    StringKind,
    SymbolKind,
    TupleElementKind,
    TupleKind,
    TypeExpression,
    TypeLiteralKind,
    TypeOperatorKind,
    TypeParameterKind,
    TypeReferenceKind,
    UndefinedKind,
    UnionTypeKind,
    UnknownKind,
    VoidKind,
)
from ..semantic.binder import Symbol, SymbolFlags
from ..semantic.jsdoc import get_jsdoc_metadata
from ..semantic.syntax import TYPE_NODE_KINDS, TYPE_WRAPPER_KINDS, SyntaxNode, unwrap_type_node
from ..semantic.types import (
    ConditionalType,
    IndexedAccessType,
    IndexInfo,
    IndexType,
    MappedType,
    SignatureKind,
    TupleElementFlags,
    TupleType,
    Type,
    TypeFlags,
    TypeParameter,
    TypeReference,
)
from . import signatures
from .context import ResolutionContext
from .declarations import get_declaration_location, get_primary_declaration, get_type_node, is_dependency_file
from .errors import MissingDeclarationError, UnresolvedTypeExpressionError
from .reference_policy import get_type_arguments, get_type_symbol, is_array_like, is_local_declaration, is_local_symbol, should_expand
from .symbol_metadata import get_symbol_metadata

logger = logging.getLogger(__name__)

# Syntax that names another type
REFERENCE_NODE_KINDS = frozenset({"type_identifier", "nested_type_identifier", "generic_type", "this_type"})

# Declarations whose name a function type takes when deciding if it is a component
FUNCTION_TYPE_OWNERS = ("property_signature", "public_field_definition", "variable_declarator", "type_alias_declaration")


def location_fields(node: SyntaxNode | None, context: ResolutionContext) -> dict[str, Any]:
    if node is None:
        return {}
    path, position = get_declaration_location(node, context.checker.project)
    return {"path": path, "position": position}


def documentation_fields(node: SyntaxNode | None) -> dict[str, Any]:
    metadata = get_jsdoc_metadata(node)
    return {"description": metadata.description, "tags": metadata.tags or None}


def node_matches_type(context: ResolutionContext, node: SyntaxNode | None, *types: Type) -> bool:
    """Whether the type written at ``node`` is one of ``types``; instantiated types never match their syntax."""
    if node is None or node.kind not in TYPE_NODE_KINDS:
        return False
    node_type = context.checker.get_type_from_type_node(node)
    return any(node_type is type_ for type_ in types)


def pick_anchor(context: ResolutionContext, type_node: SyntaxNode | None, fallback: SyntaxNode | None, *types: Type):
    type_node = unwrap_type_node(type_node)
    if node_matches_type(context, type_node, *types):
        return type_node
    return fallback


def get_declaration_anchor(type_: Type) -> SyntaxNode | None:
    """Anchor for a type reached without syntax: the literal that declares an anonymous type."""
    symbol = type_.symbol
    if type_.alias_symbol is not None or symbol is None or not symbol.name.startswith("__"):
        return None
    return get_primary_declaration(symbol)


def record_declaration(context: ResolutionContext, symbol: Symbol | None) -> None:
    declaration = get_primary_declaration(symbol)
    if declaration is not None and not is_dependency_file(declaration):
        context.record_dependency(declaration.source_file.path)


def resolve_type_expression(
    type_: Type,
    enclosing_node: SyntaxNode | None,
    context: ResolutionContext,
    default_values: Any = None,
    skip_reference: bool = False,
) -> TypeExpression | None:
    node = unwrap_type_node(enclosing_node) if enclosing_node is not None and enclosing_node.kind in TYPE_WRAPPER_KINDS else enclosing_node

    if not skip_reference and type_.is_object() and not is_array_like(type_) and context.is_resolving(type_):
        return create_type_reference(type_, node, context)

    for handler in TYPE_HANDLERS:
        if skip_reference and handler.name == "reference":
            continue
        if handler.matches(type_, node, context):
            return handler.resolve(type_, node, context, default_values)

    raise UnresolvedTypeExpressionError(context.checker, type_, enclosing_node)


# References


def is_reference(type_: Type, node: SyntaxNode | None, context: ResolutionContext) -> bool:
    if is_array_like(type_):
        return False
    if node is not None and node.kind in REFERENCE_NODE_KINDS:
        return True
    if node is not None and node.kind in TYPE_NODE_KINDS:
        return False
    return (
        type_.is_type_parameter()
        or isinstance(type_, TypeReference)
        or type_.is_class_or_interface()
        or bool(type_.flags & TypeFlags.ENUM and type_.is_union())
        or (type_.alias_symbol is not None and not type_.flags & TypeFlags.PRIMITIVE)
    )


def resolve_reference(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    if not should_expand(type_, node, context):
        return create_type_reference(type_, node, context)

    symbol = get_type_symbol(type_)
    declaration = get_primary_declaration(symbol)
    anchor = declaration if declaration is not None else node
    if declaration is not None and declaration.kind == "type_alias_declaration":
        anchor = unwrap_type_node(declaration.child("value"))
    record_declaration(context, symbol)

    if symbol is None or is_local_symbol(symbol):
        with context.guard(type_):
            return resolve_type_expression(type_, anchor, context, default_values, skip_reference=True)

    # A dependency generic instantiated with local type arguments
    with context.guard(type_), context.instantiation_site(symbol):
        resolved = resolve_type_expression(type_, anchor, context, default_values, skip_reference=True)
    if resolved is None:
        return create_type_reference(type_, node, context)
    return resolved


def get_reference_name_node(node: SyntaxNode | None) -> SyntaxNode | None:
    if node is None:
        return None
    if node.kind == "generic_type":
        return node.child("name") or node.first_named_child
    if node.kind in ("type_identifier", "nested_type_identifier"):
        return node
    return None


def get_module_specifier(context: ResolutionContext, name_node: SyntaxNode | None) -> str | None:
    """Specifier of the import that brings the referenced name (or its left-most qualifier) into scope."""
    if name_node is None:
        return None
    identifiers = [name_node]
    if name_node.kind == "nested_type_identifier":
        parts = name_node.named_children
        identifiers = [parts[-1]]
        left = parts[0] if parts else None
        while left is not None and left.kind in ("nested_identifier", "nested_type_identifier", "member_expression"):
            left = left.first_named_child
        if left is not None:
            identifiers.append(left)
    binder = context.checker.binder
    for identifier in identifiers:
        symbol = binder.resolve_name(identifier, identifier.text, SymbolFlags.TYPE | SymbolFlags.NAMESPACE | SymbolFlags.VALUE)
        if symbol is not None and symbol.flags & SymbolFlags.ALIAS and symbol.alias_module is not None:
            return symbol.alias_module
    return None


def create_type_reference(type_: Type, node: SyntaxNode | None, context: ResolutionContext) -> TypeReferenceKind:
    checker = context.checker
    name_node = get_reference_name_node(node)
    symbol = get_type_symbol(type_)

    if name_node is not None:
        name = name_node.text
    elif isinstance(type_, TypeParameter):
        name = type_.name
    elif symbol is not None:
        name = checker.get_fully_qualified_name(symbol)
    else:
        name = None

    type_arguments: list[TypeExpression] = []
    arguments_node = node.child("type_arguments") if node is not None and node.kind == "generic_type" else None
    if arguments_node is not None:
        for argument_node in arguments_node.named_children:
            resolved = resolve_type_expression(checker.get_type_from_type_node(argument_node), argument_node, context)
            if resolved is not None:
                type_arguments.append(resolved)
    elif not type_.is_type_parameter():
        for argument in get_type_arguments(type_):
            if argument.is_type_parameter() and isinstance(type_, TypeReference) and argument in type_.target.type_parameters:
                continue
            resolved = resolve_type_expression(argument, get_declaration_anchor(argument), context)
            if resolved is not None:
                type_arguments.append(resolved)

    if node is not None and node.kind in REFERENCE_NODE_KINDS:
        location = location_fields(node, context)
    else:
        location = location_fields(get_primary_declaration(symbol), context)

    return TypeReferenceKind(
        text=checker.type_to_string(type_),
        name=name if name and not name.startswith("__") else None,
        type_arguments=type_arguments or None,
        module_specifier=get_module_specifier(context, name_node),
        **location,
    )


# typeof, T[K] and infer


def resolve_type_query(type_: Type, node: SyntaxNode, context: ResolutionContext, default_values: Any):
    query = node.first_named_child
    symbol = context.checker.get_symbol_at_location(query) if query is not None else None
    anchor = symbol.value_declaration if symbol is not None else None
    return resolve_type_expression(type_, anchor, context, default_values, skip_reference=anchor is None)


def get_left_most_object_node(node: SyntaxNode) -> SyntaxNode | None:
    current: SyntaxNode | None = node
    while current is not None and current.kind == "lookup_type":
        current = unwrap_type_node(current.first_named_child)
    if current is not None and current.kind == "generic_type":
        current = current.child("name")
    return current


def resolve_indexed_access(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    checker = context.checker
    if node is not None and node.kind == "lookup_type":
        left_most = get_left_most_object_node(node)
        if left_most is not None and left_most.kind == "type_identifier" and not checker.is_generic_type(type_):
            symbol = checker.resolve_entity_name(left_most, SymbolFlags.TYPE)
            if symbol is not None and symbol.flags & SymbolFlags.TYPE_ALIAS and is_local_declaration(context, symbol):
                return resolve_type_expression(type_, get_declaration_anchor(type_), context, default_values)

        parts = node.named_children
        object_node, index_node = unwrap_type_node(parts[0]), unwrap_type_node(parts[1])
        object_type = checker.get_type_from_type_node(object_node)
        index_type = checker.get_type_from_type_node(index_node)
    elif isinstance(type_, IndexedAccessType):
        object_type, index_type = type_.object_type, type_.index_type
        object_node = index_node = None
    else:
        raise UnresolvedTypeExpressionError(checker, type_, node)

    resolved_object = resolve_type_expression(object_type, object_node or get_declaration_anchor(object_type), context)
    resolved_index = resolve_type_expression(index_type, index_node or get_declaration_anchor(index_type), context)
    if resolved_object is None or resolved_index is None:
        raise UnresolvedTypeExpressionError(checker, type_, node)
    return IndexedAccessTypeKind(
        text=checker.type_to_string(type_),
        object_type=resolved_object,
        index_type=resolved_index,
    )


def is_infer_type(type_: Type, node: SyntaxNode | None, context: ResolutionContext) -> bool:
    if node is not None and node.kind == "infer_type":
        return True
    return isinstance(type_, TypeParameter) and type_.declaration is not None and type_.declaration.kind == "infer_type" and node is None


def resolve_infer_type(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    checker = context.checker
    if not isinstance(type_, TypeParameter):
        raise UnresolvedTypeExpressionError(checker, type_, node)
    return InferTypeKind(text=checker.type_to_string(type_), parameter=signatures.resolve_type_parameter(type_, context))


# Primitives


def resolve_primitive(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    text = context.checker.type_to_string(type_)
    if type_.is_boolean() or type_.is_boolean_literal():
        return BooleanKind(text=text)
    if type_.is_number() or type_.is_number_literal():
        return NumberKind(text=text, value=type_.value if type_.is_number_literal() else None)
    if type_.is_bigint() or type_.is_bigint_literal():
        return BigIntKind(text=text, value=str(type_.value) if type_.is_bigint_literal() else None)
    if type_.is_string() or type_.is_string_literal() or type_.is_template_literal():
        return StringKind(text=text, value=type_.value if type_.is_string_literal() else None)
    if type_.is_es_symbol():
        return SymbolKind(text=text)
    if type_.is_void():
        return VoidKind(text="void")
    if type_.is_null():
        return NullKind(text="null")
    if type_.is_undefined():
        return UndefinedKind(text="undefined")
    if type_.is_unknown():
        return UnknownKind(text=text)
    if type_.is_never():
        return NeverKind(text="never")
    return AnyKind(text=text)


def is_primitive(type_: Type, node: SyntaxNode | None, context: ResolutionContext) -> bool:
    return bool(
        type_.is_boolean()
        or type_.is_boolean_literal()
        or type_.is_number()
        or type_.is_number_literal()
        or type_.is_bigint()
        or type_.is_bigint_literal()
        or type_.is_string()
        or type_.is_string_literal()
        or type_.is_template_literal()
        or type_.is_es_symbol()
        or type_.is_void()
        or type_.is_null()
        or type_.is_undefined()
        or type_.is_unknown()
        or type_.is_never()
        or type_.is_any()
    )


# Tuples and arrays


def get_tuple_element_node(declaration: SyntaxNode | None) -> SyntaxNode | None:
    if declaration is None:
        return None
    if declaration.kind in ("optional_type", "rest_type"):
        return unwrap_type_node(declaration.first_named_child)
    if declaration.kind in ("required_parameter", "optional_parameter"):
        return unwrap_type_node(declaration.child("type"))
    return declaration


def resolve_tuple(type_: TupleType, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    checker = context.checker
    elements: list[TupleElementKind] = []
    for element_type, info in zip(type_.element_types, type_.element_infos):
        anchor = pick_anchor(context, get_tuple_element_node(info.declaration), None, element_type)
        resolved = resolve_type_expression(element_type, anchor or get_declaration_anchor(element_type), context)
        if resolved is None:
            continue
        is_rest = bool(info.flags & TupleElementFlags.REST)
        is_optional = bool(info.flags & TupleElementFlags.OPTIONAL)
        text = resolved.text
        if info.label is not None:
            text = f"{info.label}{'?' if is_optional else ''}: {text}"
        if is_rest:
            text = f"...{text}"
        elements.append(
            TupleElementKind(
                text=text,
                type=resolved,
                name=info.label,
                is_rest=is_rest or None,
                is_optional=is_optional or None,
                is_readonly=type_.readonly or None,
            )
        )
    if not elements:
        return None
    return TupleKind(text=checker.type_to_string(type_), elements=elements, is_readonly=type_.readonly or None)


def get_array_element_node(node: SyntaxNode | None) -> SyntaxNode | None:
    if node is None:
        return None
    if node.kind == "readonly_type":
        node = unwrap_type_node(node.first_named_child)
    if node is None:
        return None
    if node.kind == "array_type":
        return unwrap_type_node(node.first_named_child)
    if node.kind == "generic_type":
        arguments = node.child("type_arguments")
        return unwrap_type_node(arguments.first_named_child) if arguments is not None else None
    return None


def resolve_array(type_: TypeReference, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    arguments = type_.type_arguments
    if not arguments:
        return None
    element_type = arguments[0]
    anchor = pick_anchor(context, get_array_element_node(node), None, element_type)
    element = resolve_type_expression(element_type, anchor or get_declaration_anchor(element_type), context, default_values)
    if element is None:
        return None
    return ArrayKind(
        text=context.checker.type_to_string(type_),
        element=element,
        is_readonly=True if type_.is_readonly_array() else None,
    )


# Conditional types and type operators


def resolve_conditional(type_: ConditionalType, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    checker = context.checker
    root_node = type_.root.node
    branches: list[TypeExpression] = []
    check_type: Type | None = None
    for field_name in ("left", "right", "consequence", "alternative"):
        branch_node = unwrap_type_node(root_node.child(field_name))
        branch_type = checker.instantiate(checker.get_type_from_type_node(branch_node), type_.mapper)
        if check_type is None:
            check_type = branch_type
        anchor = pick_anchor(context, branch_node, None, branch_type)
        resolved = resolve_type_expression(branch_type, anchor or get_declaration_anchor(branch_type), context, default_values)
        if resolved is None:
            return None
        branches.append(resolved)
    check, extends, true_branch, false_branch = branches
    return ConditionalTypeKind(
        text=checker.type_to_string(type_),
        check_type=check,
        extends_type=extends,
        true_type=true_branch,
        false_type=false_branch,
        is_distributive=check_type is not None and check_type.is_type_parameter(),
    )


def is_type_operator(type_: Type, node: SyntaxNode | None, context: ResolutionContext) -> bool:
    if isinstance(type_, IndexType):
        return True
    return node is not None and node.kind in ("index_type_query", "readonly_type")


def resolve_type_operator(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    checker = context.checker
    if node is not None and node.kind in ("index_type_query", "readonly_type"):
        operator = "keyof" if node.kind == "index_type_query" else "readonly"
        operand_node = unwrap_type_node(node.first_named_child)
        operand_type = checker.get_type_from_type_node(operand_node)
        if isinstance(type_, IndexType) and not node_matches_type(context, node, type_):
            operand_type, operand_node = type_.target, None
    else:
        operator, operand_type, operand_node = "keyof", type_.target, None

    operand = resolve_type_expression(operand_type, operand_node or get_declaration_anchor(operand_type), context)
    if operand is None:
        raise UnresolvedTypeExpressionError(checker, type_, operand_node or node)
    return TypeOperatorKind(text=checker.type_to_string(type_), operator=operator, type=operand)


# Function types


def is_function_type(type_: Type, node: SyntaxNode | None, context: ResolutionContext) -> bool:
    if not type_.is_object() or is_array_like(type_):
        return False
    if node is not None and node.kind == "function_type":
        return True
    resolved = context.checker.get_resolved_members(type_)
    return bool(resolved.call_signatures) and not resolved.properties and not resolved.construct_signatures and not resolved.index_infos


def get_function_type_owner_name(node: SyntaxNode | None) -> str | None:
    if node is None:
        return None
    owner = node if node.kind in FUNCTION_TYPE_OWNERS else node.find_ancestor(*FUNCTION_TYPE_OWNERS)
    if owner is None:
        return None
    name = owner.child("name")
    return name.text if name is not None else None


def resolve_function_type(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    call_signatures = context.checker.get_signatures_of_type(type_, SignatureKind.CALL)
    if len(call_signatures) != 1:
        return None
    return signatures.resolve_function_type(
        type_, call_signatures[0], context, owner_name=get_function_type_owner_name(node)
    )


# Unions and intersections


def flatten_type_nodes(node: SyntaxNode, kind: str) -> list[SyntaxNode]:
    operands: list[SyntaxNode] = []
    for child in node.named_children:
        child = unwrap_type_node(child) if child.kind == "parenthesized_type" else child
        if child.kind == kind:
            operands.extend(flatten_type_nodes(child, kind))
        else:
            operands.append(child)
    return operands


def get_operands(type_: Type, node: SyntaxNode | None, context: ResolutionContext, node_kind: str) -> list[tuple[Type, SyntaxNode | None]]:
    """Operand types paired with their anchors: syntax when it describes ``type_``, members otherwise."""
    checker = context.checker
    if node is not None and node.kind == node_kind and (node_matches_type(context, node, type_) or not type_.types):
        return [(checker.get_type_from_type_node(operand), operand) for operand in flatten_type_nodes(node, node_kind)]
    return [(member, get_declaration_anchor(member)) for member in type_.types]


def is_same_member(left: Kind, right: Kind) -> bool:
    return (
        left.kind == right.kind
        and left.text == right.text
        and left.path == right.path
        and (left.position.start.line if left.position else None) == (right.position.start.line if right.position else None)
        and (left.position.end.line if left.position else None) == (right.position.end.line if right.position else None)
    )


def is_union(type_: Type, node: SyntaxNode | None, context: ResolutionContext) -> bool:
    return type_.is_union() or (node is not None and node.kind == "union_type")


def resolve_union(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    if node is not None and node.kind == "intersection_type":
        return resolve_intersection(type_, node, context, default_values)

    members: list[TypeExpression] = []
    for member_type, anchor in get_operands(type_, node, context, "union_type"):
        resolved = resolve_type_expression(member_type, anchor, context, default_values)
        if resolved is None:
            continue
        if isinstance(resolved, BooleanKind) and members and isinstance(members[-1], BooleanKind):
            members.pop()
            resolved = BooleanKind(text="boolean")
        members.append(resolved)

    unique: list[TypeExpression] = []
    for member in members:
        if not any(is_same_member(existing, member) for existing in unique):
            unique.append(member)
    if not unique:
        return None
    if len(unique) == 1:
        return unique[0]
    return UnionTypeKind(text=" | ".join(member.text for member in unique), types=unique)


def resolve_intersection(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    checker = context.checker
    resolved_types: list[TypeExpression] = []
    for operand_type, anchor in get_operands(type_, node, context, "intersection_type"):
        resolved = resolve_type_expression(operand_type, anchor, context, default_values)
        if resolved is not None:
            resolved_types.append(resolved)

    if resolved_types and all(
        isinstance(t, TypeLiteralKind) and all(isinstance(m, PropertySignatureKind) for m in t.members) for t in resolved_types
    ):
        properties = [member for literal in resolved_types for member in literal.members]
        if not properties:
            return None
        return TypeLiteralKind(text=checker.type_to_string(type_), members=properties)

    if not resolved_types:
        return None
    if len(resolved_types) == 1 and isinstance(resolved_types[0], StringKind):
        return resolved_types[0]
    return IntersectionTypeKind(text=checker.type_to_string(type_), types=resolved_types)


def is_intersection(type_: Type, node: SyntaxNode | None, context: ResolutionContext) -> bool:
    return type_.is_intersection() or (node is not None and node.kind == "intersection_type")


# Mapped types


def has_local_mapped_source(context: ResolutionContext, mapped: MappedType) -> bool:
    if not is_dependency_file(mapped.declaration):
        return True
    sources = list(mapped.alias_type_arguments)
    if mapped.mapper is not None:
        sources.extend(mapped.mapper.map(parameter) for parameter in mapped.mapper.sources)
    return any(
        (symbol := get_type_symbol(source)) is not None and is_local_symbol(symbol) for source in sources
    )


def resolve_mapped(type_: MappedType, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    checker = context.checker
    text = checker.type_to_string(type_)
    if not checker.contains_type_parameter(type_, deep=True) and has_local_mapped_source(context, type_):
        with context.guard(type_):
            members = resolve_property_signatures(type_, node or type_.declaration, context, default_values)
        if members:
            return TypeLiteralKind(text=text, members=members)

    parameter = type_.type_parameter
    constraint = checker.get_constraint_type_from_mapped_type(type_)
    clause = type_.declaration.child_of_kind("mapped_type_clause")
    constraint_node = clause.child("type") if clause is not None else None
    constraint_anchor = pick_anchor(context, constraint_node, None, constraint)
    resolved_constraint = resolve_type_expression(constraint, constraint_anchor or get_declaration_anchor(constraint), context)

    template = checker.get_template_type_from_mapped_type(type_)
    template_anchor = pick_anchor(context, checker.get_mapped_type_template_node(type_), None, template)
    resolved_template = resolve_type_expression(template, template_anchor or get_declaration_anchor(template), context, default_values)
    if resolved_template is None:
        raise UnresolvedTypeExpressionError(checker, type_, node)

    parameter_text = f"{parameter.name} in {resolved_constraint.text}" if resolved_constraint is not None else parameter.name
    return MappedTypeKind(
        text=text,
        parameter=TypeParameterKind(text=parameter_text, name=parameter.name, constraint_type=resolved_constraint),
        type=resolved_template,
        is_readonly=type_.readonly_modifier == "+" or None,
        is_optional=type_.optional_modifier == "+" or None,
    )


# Object types


def filter_undefined_from_union(kind: TypeExpression) -> TypeExpression:
    """Drop ``undefined`` members from a resolved union; optionality lives in ``is_optional``."""
    if not isinstance(kind, UnionTypeKind):
        return kind
    members = [member for member in kind.types if not isinstance(member, UndefinedKind)]
    if not members:
        return kind
    if len(members) == 1:
        return members[0]
    return UnionTypeKind(
        text=" | ".join(member.text for member in members),
        types=members,
        path=kind.path,
        position=kind.position,
    )


def is_readonly_type(context: ResolutionContext, type_: Type) -> bool:
    """Readonly index signature, an alias of ``Readonly`` or every property readonly."""
    checker = context.checker
    number_info = checker.get_index_info_of_type(type_, checker.number_type) if type_.is_object() else None
    if number_info is not None and number_info.is_readonly:
        return True
    if type_.alias_symbol is not None and type_.alias_symbol.name == "Readonly":
        return True
    if type_.is_object() and not is_array_like(type_):
        properties = checker.get_properties_of_type(type_)
        if not properties:
            return False
        return all(
            property_.value_declaration is not None
            and property_.value_declaration.kind in ("property_signature", "public_field_definition")
            and checker.is_readonly_symbol(property_)
            for property_ in properties
        )
    return False


def get_default_value(default_values: Any, name: str) -> Any:
    if isinstance(default_values, dict):
        return default_values.get(name)
    return None


def get_property_text(declaration: SyntaxNode | None, name: str, is_optional: bool, is_readonly: bool, type_text: str) -> str:
    """Source text of a property signature, or a rendering when the written type was instantiated."""
    if declaration is not None and declaration.kind == "property_signature":
        return declaration.text.rstrip(";,").strip()
    return f"{'readonly ' if is_readonly else ''}{name}{'?' if is_optional else ''}: {type_text}"


def resolve_property_signature(
    property_: Symbol,
    enclosing_node: SyntaxNode | None,
    context: ResolutionContext,
    default_values: Any = None,
    at_instantiation_site: bool = False,
) -> PropertySignatureKind | None:
    checker = context.checker
    property_declaration = get_primary_declaration(property_)
    metadata = get_symbol_metadata(checker, property_, property_declaration)
    if at_instantiation_site:
        metadata = replace(metadata, is_in_node_modules=False)
    if not context.filter(metadata):
        return None

    declaration = property_declaration or enclosing_node
    if declaration is None:
        raise MissingDeclarationError(property_.name, "pass the enclosing node to resolve synthesized properties")

    default_value = get_default_value(default_values, property_.name)
    property_type = checker.get_type_of_symbol(property_)
    is_optional = property_.is_optional or default_value is not None
    stripped = checker.remove_undefined(property_type) if is_optional else property_type

    type_node = get_type_node(property_declaration) if property_declaration is not None else None
    anchor = pick_anchor(context, type_node, None, property_type, stripped)
    if anchor is not None:
        resolved = resolve_type_expression(checker.get_type_from_type_node(anchor), anchor, context, default_value)
    else:
        anchor_type = stripped if is_optional else property_type
        fallback = get_declaration_anchor(anchor_type) or declaration
        resolved = resolve_type_expression(anchor_type, fallback, context, default_value)
    if resolved is None:
        return None
    if is_optional:
        resolved = filter_undefined_from_union(resolved)
    is_readonly = checker.is_readonly_symbol(property_)

    return PropertySignatureKind(
        text=get_property_text(
            property_declaration if anchor is not None or type_node is None else None,
            property_.name,
            is_optional,
            is_readonly,
            checker.type_to_string(stripped),
        ),
        name=property_.name,
        type=resolved,
        is_optional=is_optional or None,
        is_readonly=is_readonly or None,
        **documentation_fields(property_declaration),
        **location_fields(property_declaration, context),
    )


def resolve_property_signatures(
    type_: Type,
    enclosing_node: SyntaxNode | None,
    context: ResolutionContext,
    default_values: Any = None,
) -> list[PropertySignatureKind]:
    is_readonly = is_readonly_type(context, type_)
    at_site = context.is_instantiation_site(get_type_symbol(type_))
    resolved: list[PropertySignatureKind] = []
    for property_ in context.checker.get_properties_of_type(type_):
        signature = resolve_property_signature(property_, enclosing_node, context, default_values, at_site)
        if signature is None:
            continue
        if is_readonly:
            signature.is_readonly = True
        resolved.append(signature)
    return resolved


def resolve_index_signature(info: IndexInfo, context: ResolutionContext) -> IndexSignatureKind:
    checker = context.checker
    declaration = info.declaration
    key_node = value_node = None
    if declaration is not None:
        key_node = declaration.child("index_type")
        if key_node is None:
            named = [c for c in declaration.named_children if c.kind not in ("type_annotation", "identifier")]
            key_node = named[0] if named else None
        value_node = get_index_value_node(declaration)

    key_anchor = pick_anchor(context, key_node, None, info.key_type)
    key = resolve_type_expression(info.key_type, key_anchor, context)
    value_anchor = pick_anchor(context, value_node, None, info.type)
    value = resolve_type_expression(info.type, value_anchor or get_declaration_anchor(info.type), context)
    if key is None or value is None:
        raise UnresolvedTypeExpressionError(checker, info.type, declaration)

    parameter = IndexSignatureParameterKind(text=f"{info.parameter_name}: {key.text}", name=info.parameter_name, type=key)
    prefix = "readonly " if info.is_readonly else ""
    text = declaration.text.rstrip(";,").strip() if declaration is not None else f"{prefix}[{parameter.text}]: {value.text}"
    return IndexSignatureKind(
        text=text,
        parameter=parameter,
        type=value,
        is_readonly=info.is_readonly or None,
        **documentation_fields(declaration),
        **location_fields(declaration, context),
    )


def get_index_value_node(declaration: SyntaxNode) -> SyntaxNode | None:
    annotation = declaration.child_of_kind("type_annotation")
    return unwrap_type_node(annotation) if annotation is not None else declaration.child("type")


def resolve_index_signatures(type_: Type, context: ResolutionContext) -> list[IndexSignatureKind]:
    return [resolve_index_signature(info, context) for info in context.checker.get_index_infos_of_type(type_)]


def resolve_object(type_: Type, node: SyntaxNode | None, context: ResolutionContext, default_values: Any):
    declaration = get_primary_declaration(get_type_symbol(type_))
    with context.guard(type_):
        properties = resolve_property_signatures(type_, declaration or node, context, default_values)
        index_signatures = resolve_index_signatures(type_, context)
    if not properties and not index_signatures:
        return None
    return TypeLiteralKind(text=context.checker.type_to_string(type_), members=[*properties, *index_signatures])


# Interface and type literal members


def resolve_member_signature(member: SyntaxNode, owner: Symbol, context: ResolutionContext, default_values: Any = None):
    """Resolve one member of an interface body in declaration order."""
    checker = context.checker
    kind = member.kind
    if kind == "property_signature":
        name = member.child("name")
        property_ = checker.binder.get_members(owner).get(name.text if name is not None else "")
        if property_ is None:
            property_ = checker.get_symbol_of_declaration(member)
        return resolve_property_signature(property_, member, context, default_values) if property_ is not None else None
    if kind == "method_signature":
        return resolve_method_signature(member, context)
    if kind in ("call_signature", "construct_signature"):
        signature = checker.get_signature_from_declaration(member)
        kind_class = ConstructSignatureKind if kind == "construct_signature" else CallSignatureKind
        return signatures.resolve_call_signature(signature, context, kind_class=kind_class)
    if kind == "index_signature":
        if member.child_of_kind("mapped_type_clause") is not None:
            return None
        return resolve_index_signature(checker.get_index_info_of_declaration(member), context)
    logger.debug("Skipping member %s", kind)
    return None


def resolve_method_signature(member: SyntaxNode, context: ResolutionContext):
    checker = context.checker
    name_node = member.child("name")
    name = name_node.text if name_node is not None else None
    symbol = checker.get_symbol_of_declaration(member)
    if symbol is not None and not context.filter(get_symbol_metadata(checker, symbol, member)):
        return None
    signature = checker.get_signature_from_declaration(member)
    resolved = signatures.resolve_call_signature(signature, context)
    if resolved is None:
        return None
    shared = {
        "name": name,
        "text": member.text.rstrip(";,").strip(),
        "type_parameters": resolved.type_parameters,
        "this_type": resolved.this_type,
        "return_type": resolved.return_type,
        "is_async": resolved.is_async,
        "is_generator": resolved.is_generator,
        **documentation_fields(member),
        **location_fields(member, context),
    }
    if member.has_token("get"):
        return GetAccessorSignatureKind(**shared)
    if member.has_token("set"):
        return SetAccessorSignatureKind(parameter=resolved.parameters[0] if resolved.parameters else None, **shared)
    return MethodSignatureKind(parameters=resolved.parameters, **shared)


@dataclass(frozen=True)
class TypeHandler:
    """One entry of the dispatch table."""

    name: str
    matches: Callable[[Type, SyntaxNode | None, ResolutionContext], bool]
    resolve: Callable[[Any, SyntaxNode | None, ResolutionContext, Any], TypeExpression | None]


TYPE_HANDLERS: list[TypeHandler] = [
    TypeHandler("reference", is_reference, resolve_reference),
    TypeHandler("type_query", lambda t, n, c: n is not None and n.kind == "type_query", resolve_type_query),
    TypeHandler(
        "indexed_access",
        lambda t, n, c: isinstance(t, IndexedAccessType) or (n is not None and n.kind == "lookup_type"),
        resolve_indexed_access,
    ),
    TypeHandler("infer", is_infer_type, resolve_infer_type),
    TypeHandler("primitive", is_primitive, resolve_primitive),
    TypeHandler("tuple", lambda t, n, c: isinstance(t, TupleType), resolve_tuple),
    TypeHandler("array", lambda t, n, c: isinstance(t, TypeReference) and t.is_array(), resolve_array),
    TypeHandler("conditional", lambda t, n, c: isinstance(t, ConditionalType), resolve_conditional),
    TypeHandler("type_operator", is_type_operator, resolve_type_operator),
    TypeHandler("function", is_function_type, resolve_function_type),
    TypeHandler("union", is_union, resolve_union),
    TypeHandler("intersection", is_intersection, resolve_intersection),
    TypeHandler("mapped", lambda t, n, c: isinstance(t, MappedType), resolve_mapped),
    TypeHandler("object", lambda t, n, c: t.is_object(), resolve_object),
    TypeHandler("object_keyword", lambda t, n, c: t.is_non_primitive(), lambda t, n, c, d: ObjectKind(text="object")),
]
