"""
Top-level resolution of declarations into kind graphs.

``resolve_type`` is the entry point: given the type of a declaration and the
declaration node itself, it decides which named kind describes it (variable,
function, component, class, enum, type parameter, type alias, interface or
namespace) and resolves its parts through the type expression handlers.
"""

import logging
from typing import Any

from ..models.kind_models import (
    CallSignatureKind,
    ClassConstructorKind,
    ClassGetAccessorKind,
    ClassKind,
    ClassMethodKind,
    ClassPropertyKind,
    ClassSetAccessorKind,
    ComponentKind,
    ComponentSignatureKind,
    EnumKind,
    EnumMemberKind,
    FunctionKind,
    InterfaceKind,
    Kind,
    NamespaceKind,
    TypeAliasKind,
    TypeParameterKind,
    TypeReferenceKind,
    VariableKind,
)
from ..semantic.binder import Symbol, SymbolFlags
from ..semantic.jsdoc import get_jsdoc_metadata
from ..semantic.syntax import SyntaxNode, unwrap_type_node
from ..semantic.types import Signature, SignatureKind, Type, TypeParameter
from . import expressions, signatures
from .context import ResolutionContext, ResolutionPolicy
from .declarations import get_primary_declaration
from .errors import ResolutionError, UnresolvedTypeExpressionError
from .literals import get_initializer_value
from .symbol_metadata import NAMED_DECLARATIONS, get_symbol_metadata
from .type_filter import TypeFilter, create_symbol_filter

logger = logging.getLogger(__name__)

CLASS_DECLARATIONS = ("class_declaration", "abstract_class_declaration", "class")
NAMESPACE_DECLARATIONS = ("internal_module", "module")
TYPE_ONLY_DECLARATIONS = ("interface_declaration", "type_alias_declaration")


def create_context(checker, filter_: TypeFilter | None = None, policy: ResolutionPolicy | None = None) -> ResolutionContext:
    return ResolutionContext(
        checker=checker,
        filter=create_symbol_filter(filter_),
        policy=policy or ResolutionPolicy(),
    )


def resolve_type(
    checker,
    type_: Type,
    enclosing_node: SyntaxNode | None,
    filter_: TypeFilter | None = None,
    *,
    policy: ResolutionPolicy | None = None,
    dependencies: set[str] | None = None,
) -> Kind | None:
    """
    Resolve the type of a declaration into a named kind.

    Args:
        checker: Type checker of the project the declaration belongs to
        type_: Type of the declaration (declared type for type-only declarations)
        enclosing_node: The declaration node
        filter_: Symbol filter predicate or type filter descriptors
        policy: Overrides for the expansion heuristics
        dependencies: Receives the paths of project files the result depends on

    Returns:
        The resolved kind, or None when the declaration's type carries no information
    """
    context = create_context(checker, filter_, policy)
    resolved = resolve_declaration(type_, enclosing_node, context)
    if dependencies is not None:
        dependencies.update(context.dependencies)
    return resolved


def resolve_signature(
    checker,
    signature: Signature,
    enclosing_node: SyntaxNode | None = None,
    filter_: TypeFilter | None = None,
) -> CallSignatureKind | None:
    """Resolve a single signature, e.g. the resolved signature of a call expression."""
    context = create_context(checker, filter_)
    return signatures.resolve_call_signature(signature, context)


def get_root_symbol(checker, type_: Type) -> Symbol | None:
    if type_.alias_symbol is not None:
        return type_.alias_symbol
    if type_.symbol is not None:
        return type_.symbol
    return checker.get_apparent_type(type_).symbol


def is_owned_by(checker, type_: Type, enclosing_node: SyntaxNode | None) -> bool:
    """Whether ``type_`` is the type the enclosing declaration itself introduces."""
    if enclosing_node is None:
        return False
    declaration_symbol = checker.get_symbol_of_declaration(enclosing_node)
    if declaration_symbol is None:
        return False
    owner = type_.alias_symbol if type_.alias_symbol is not None else type_.symbol
    return owner is declaration_symbol


def resolve_declaration(type_: Type, enclosing_node: SyntaxNode | None, context: ResolutionContext) -> Kind | None:
    checker = context.checker
    symbol = get_root_symbol(checker, type_)
    metadata = get_symbol_metadata(checker, symbol, enclosing_node)
    symbol_declaration = get_primary_declaration(symbol)
    if enclosing_node is not None and enclosing_node.kind in NAMED_DECLARATIONS:
        declaration = enclosing_node
    else:
        declaration = symbol_declaration or enclosing_node
    if symbol_declaration is not None:
        expressions.record_declaration(context, symbol)

    owned = is_owned_by(checker, type_, enclosing_node)
    if owned:
        with context.guard(type_):
            resolved = resolve_named_kind(type_, enclosing_node, symbol_declaration, metadata.name, context, owned)
    else:
        resolved = resolve_named_kind(type_, enclosing_node, symbol_declaration, metadata.name, context, owned)
    if resolved is None:
        return None

    jsdoc = get_jsdoc_metadata(declaration)
    if getattr(resolved, "description", None) is None and hasattr(resolved, "description"):
        resolved.description = jsdoc.description
    if getattr(resolved, "tags", None) is None and hasattr(resolved, "tags"):
        resolved.tags = jsdoc.tags or None
    if declaration is not None:
        location = expressions.location_fields(declaration, context)
        resolved.path = location["path"]
        resolved.position = location["position"]
    return resolved


def resolve_named_kind(
    type_: Type,
    enclosing_node: SyntaxNode | None,
    symbol_declaration: SyntaxNode | None,
    name: str | None,
    context: ResolutionContext,
    owned: bool,
) -> Kind | None:
    checker = context.checker
    text = checker.type_to_string(type_)
    call_signatures = checker.get_signatures_of_type(type_, SignatureKind.CALL)
    enclosing_kind = enclosing_node.kind if enclosing_node is not None else None

    if not call_signatures and enclosing_kind == "variable_declarator":
        resolved_type = resolve_variable_type(type_, enclosing_node, context, owned)
        if resolved_type is None:
            return None
        return VariableKind(text=text, name=name, type=resolved_type)

    if call_signatures and enclosing_kind != "type_alias_declaration":
        return resolve_callable(call_signatures, name, text, context)

    if symbol_declaration is not None and symbol_declaration.kind in CLASS_DECLARATIONS:
        return resolve_class(symbol_declaration, text, context)

    if symbol_declaration is not None and symbol_declaration.kind == "enum_declaration":
        return resolve_enum(symbol_declaration, name, text, context)

    if isinstance(type_, TypeParameter):
        return signatures.resolve_type_parameter(type_, context)

    alias_declaration = None
    if enclosing_kind == "type_alias_declaration":
        alias_declaration = enclosing_node
    elif symbol_declaration is not None and symbol_declaration.kind == "type_alias_declaration":
        alias_declaration = symbol_declaration
    if alias_declaration is not None:
        return resolve_type_alias(alias_declaration, name, text, context)

    if symbol_declaration is not None and symbol_declaration.kind == "interface_declaration":
        return resolve_interface(symbol_declaration, type_, name, text, context)

    if symbol_declaration is not None and symbol_declaration.kind in NAMESPACE_DECLARATIONS:
        return resolve_namespace(symbol_declaration, name, text, context)

    if enclosing_kind == "variable_declarator":
        resolved_type = expressions.resolve_type_expression(type_, enclosing_node, context)
        if resolved_type is None:
            raise UnresolvedTypeExpressionError(checker, type_, enclosing_node)
        return VariableKind(text=text, name=name, type=resolved_type)

    raise ResolutionError(f'No type could be resolved for "{name or text}"')


def resolve_variable_type(type_: Type, declarator: SyntaxNode, context: ResolutionContext, owned: bool):
    checker = context.checker
    type_node = unwrap_type_node(declarator.child("type"))
    if type_node is not None:
        return expressions.resolve_type_expression(checker.get_type_from_type_node(type_node), type_node, context)
    return expressions.resolve_type_expression(type_, declarator, context, skip_reference=owned)


# Functions and components


def resolve_callable(call_signatures: list[Signature], name: str | None, text: str, context: ResolutionContext):
    resolved_signatures = [
        resolved for signature in call_signatures if (resolved := signatures.resolve_call_signature(signature, context)) is not None
    ]
    if not signatures.is_component(name, resolved_signatures):
        return FunctionKind(text=text, name=name, signatures=resolved_signatures)

    component_signatures: list[ComponentSignatureKind] = []
    for signature in resolved_signatures:
        if signature.is_generator:
            raise ValueError(f'Component "{name}" cannot be a generator function')
        component_signatures.append(
            ComponentSignatureKind(
                text=signature.text,
                parameter=signature.parameters[0] if signature.parameters else None,
                type_parameters=signature.type_parameters,
                this_type=signature.this_type,
                return_type=signature.return_type,
                is_async=signature.is_async,
                is_generator=signature.is_generator,
                description=signature.description,
                tags=signature.tags,
                path=signature.path,
                position=signature.position,
            )
        )
    return ComponentKind(text=text, name=name, signatures=component_signatures)


# Classes


def get_visibility(member: SyntaxNode) -> str | None:
    modifier = member.child_of_kind("accessibility_modifier")
    return modifier.text if modifier is not None else None


def get_scope(member: SyntaxNode) -> str | None:
    if member.kind == "abstract_method_signature" or member.has_token("abstract"):
        return "abstract"
    if member.has_token("static"):
        return "static"
    return None


def is_override(member: SyntaxNode) -> bool | None:
    return member.child_of_kind("override_modifier") is not None or member.has_token("override") or None


def is_private_member(member: SyntaxNode) -> bool:
    name = member.child("name")
    if name is not None and name.kind == "private_property_identifier":
        return True
    return get_visibility(member) == "private"


def get_member_name(member: SyntaxNode) -> str | None:
    name = member.child("name")
    return name.text if name is not None else None


def member_fields(member: SyntaxNode, context: ResolutionContext) -> dict[str, Any]:
    return {
        "name": get_member_name(member),
        "scope": get_scope(member),
        "visibility": get_visibility(member),
        "is_override": is_override(member),
        **expressions.documentation_fields(member),
        **expressions.location_fields(member, context),
    }


def resolve_class(declaration: SyntaxNode, text: str, context: ResolutionContext) -> ClassKind:
    checker = context.checker
    symbol = checker.get_symbol_of_declaration(declaration)
    resolved = ClassKind(text=text, name=get_member_name(declaration))
    if symbol is None:
        return resolved
    # Self references inside members stay shallow
    with context.guard(checker.get_declared_type_of_symbol(symbol)):
        resolve_class_members(declaration, symbol, resolved, context)
    return resolved


def resolve_class_members(declaration: SyntaxNode, symbol: Symbol, resolved: ClassKind, context: ResolutionContext) -> None:
    checker = context.checker
    constructor = checker.binder.get_members(symbol).get("__constructor")
    if constructor is not None:
        resolved.constructor = resolve_class_constructor(constructor, context)

    body = declaration.child("body")
    members = body.named_children if body is not None else []
    accessors: list[ClassGetAccessorKind | ClassSetAccessorKind] = []
    methods: list[ClassMethodKind] = []
    properties: list[ClassPropertyKind] = []
    seen_methods: set[int] = set()
    for member in members:
        if member.kind not in ("method_definition", "abstract_method_signature", "method_signature", "public_field_definition"):
            continue
        if get_member_name(member) == "constructor" or is_private_member(member):
            continue
        member_symbol = checker.get_symbol_of_declaration(member)
        if member_symbol is not None and not context.filter(get_symbol_metadata(checker, member_symbol, member)):
            continue
        if member.kind == "public_field_definition":
            properties.append(resolve_class_property(member, member_symbol, context))
        elif member.has_token("get") or member.has_token("set"):
            accessors.append(resolve_class_accessor(member, context))
        elif member_symbol is not None and member_symbol.id not in seen_methods:
            seen_methods.add(member_symbol.id)
            methods.append(resolve_class_method(member, member_symbol, context))

    resolved.accessors = accessors or None
    resolved.methods = methods or None
    resolved.properties = properties or None
    resolved.extends = resolve_class_extends(declaration, context)
    resolved.implements = resolve_class_implements(declaration, context)


def resolve_class_constructor(constructor: Symbol, context: ResolutionContext) -> ClassConstructorKind | None:
    checker = context.checker
    declarations = constructor.declarations
    without_body = [d for d in declarations if d.child("body") is None]
    if without_body and len(without_body) < len(declarations):
        declarations = without_body
    resolved_signatures = [
        resolved
        for declaration in declarations
        if (resolved := signatures.resolve_call_signature(checker.get_signature_from_declaration(declaration), context))
        is not None
    ]
    if not resolved_signatures:
        return None
    primary = declarations[0]
    parameters_text = ", ".join(parameter.text for parameter in resolved_signatures[0].parameters)
    return ClassConstructorKind(
        text=f"constructor({parameters_text})",
        signatures=resolved_signatures,
        **expressions.documentation_fields(primary),
        **expressions.location_fields(primary, context),
    )


def resolve_class_accessor(member: SyntaxNode, context: ResolutionContext) -> ClassGetAccessorKind | ClassSetAccessorKind:
    checker = context.checker
    signature = checker.get_signature_from_declaration(member)
    if member.has_token("set"):
        resolved = signatures.resolve_call_signature(signature, context)
        parameter = resolved.parameters[0] if resolved is not None and resolved.parameters else None
        if parameter is None:
            raise ResolutionError(f"Class setter parameter could not be resolved\n\n{member.text}")
        return ClassSetAccessorKind(text=parameter.type.text, parameter=parameter, **member_fields(member, context))

    return_type = signatures.resolve_return_type(signature, context)
    if return_type is None:
        raise UnresolvedTypeExpressionError(checker, checker.get_return_type_of_signature(signature), member)
    return ClassGetAccessorKind(text=return_type.text, return_type=return_type, **member_fields(member, context))


def resolve_class_method(member: SyntaxNode, symbol: Symbol, context: ResolutionContext) -> ClassMethodKind:
    checker = context.checker
    resolved_signatures = [
        resolved
        for signature in checker.get_signatures_of_symbol(symbol)
        if (resolved := signatures.resolve_call_signature(signature, context)) is not None
    ]
    text = checker.type_to_string(checker.get_type_of_symbol(symbol))
    return ClassMethodKind(text=text, signatures=resolved_signatures, **member_fields(member, context))


def resolve_class_property(member: SyntaxNode, symbol: Symbol | None, context: ResolutionContext) -> ClassPropertyKind:
    checker = context.checker
    type_node = unwrap_type_node(member.child("type"))
    value_node = member.child("value")
    property_type = checker.get_type_of_symbol(symbol) if symbol is not None else checker.get_type_from_type_node(type_node)
    is_optional = member.has_token("?") or value_node is not None

    anchor = expressions.pick_anchor(context, type_node, None, property_type)
    if anchor is not None:
        resolved_type = expressions.resolve_type_expression(checker.get_type_from_type_node(anchor), anchor, context)
    else:
        resolved_type = expressions.resolve_type_expression(
            property_type, expressions.get_declaration_anchor(property_type) or member, context
        )
    if resolved_type is None:
        raise UnresolvedTypeExpressionError(checker, property_type, member)
    if is_optional:
        resolved_type = expressions.filter_undefined_from_union(resolved_type)

    return ClassPropertyKind(
        text=checker.type_to_string(property_type),
        type=resolved_type,
        initializer=get_initializer_value(value_node, checker),
        is_optional=is_optional or None,
        is_readonly=member.has_token("readonly") or None,
        **member_fields(member, context),
    )


def get_heritage_clause(declaration: SyntaxNode, kind: str) -> SyntaxNode | None:
    heritage = declaration.child_of_kind("class_heritage")
    return heritage.child_of_kind(kind) if heritage is not None else None


def resolve_class_extends(declaration: SyntaxNode, context: ResolutionContext) -> TypeReferenceKind | None:
    checker = context.checker
    clause = get_heritage_clause(declaration, "extends_clause")
    if clause is None:
        return None
    symbol = checker.get_symbol_of_declaration(declaration)
    instance = checker.get_declared_type_of_symbol(symbol)
    bases = checker.get_base_types(instance)
    if not bases:
        return None
    reference = expressions.create_type_reference(bases[0], None, context)
    expression = clause.first_named_child
    while expression is not None and expression.kind == "member_expression":
        expression = expression.first_named_child
    if expression is not None and expression.kind == "identifier":
        symbol = checker.binder.resolve_name(expression, expression.text, SymbolFlags.VALUE | SymbolFlags.NAMESPACE)
        if symbol is not None and symbol.flags & SymbolFlags.ALIAS:
            reference.module_specifier = symbol.alias_module
    return reference


def resolve_class_implements(declaration: SyntaxNode, context: ResolutionContext) -> list[TypeReferenceKind] | None:
    checker = context.checker
    clause = get_heritage_clause(declaration, "implements_clause")
    if clause is None:
        return None
    references = [
        expressions.create_type_reference(checker.get_type_from_type_node(node), node, context) for node in clause.named_children
    ]
    return references or None


# Enums, aliases, interfaces and namespaces


def resolve_enum(declaration: SyntaxNode, name: str | None, text: str, context: ResolutionContext) -> EnumKind:
    checker = context.checker
    body = declaration.child("body")
    members: list[EnumMemberKind] = []
    for member in body.named_children if body is not None else []:
        if member.kind == "enum_assignment":
            member_name = member.child("name")
        elif member.kind in ("property_identifier", "string", "identifier"):
            member_name = member
        else:
            continue
        members.append(
            EnumMemberKind(
                text=member.text,
                name=member_name.text.strip("'\"") if member_name is not None else None,
                value=checker.get_enum_member_value(member),
                **expressions.documentation_fields(member),
                **expressions.location_fields(member, context),
            )
        )
    return EnumKind(text=text, name=name, members=members)


def resolve_type_alias(declaration: SyntaxNode, name: str | None, text: str, context: ResolutionContext) -> TypeAliasKind | None:
    checker = context.checker
    symbol = checker.get_symbol_of_declaration(declaration)
    value_node = unwrap_type_node(declaration.child("value"))
    value_type = checker.get_type_from_type_node(value_node)
    owned = value_type.alias_symbol is not None and value_type.alias_symbol is symbol
    resolved_type = expressions.resolve_type_expression(value_type, value_node, context, skip_reference=owned)
    if resolved_type is None:
        return None
    type_parameters = [
        signatures.resolve_type_parameter(parameter, context) for parameter in checker.get_type_parameters_of_alias(symbol)
    ] if symbol is not None else []
    return TypeAliasKind(text=text, name=name, type_parameters=type_parameters, type=resolved_type)


def resolve_interface(declaration: SyntaxNode, type_: Type, name: str | None, text: str, context: ResolutionContext) -> InterfaceKind:
    checker = context.checker
    symbol = checker.get_symbol_of_declaration(declaration)
    type_parameters: list[TypeParameterKind] = [
        signatures.resolve_type_parameter(parameter, context) for parameter in getattr(type_, "type_parameters", None) or []
    ]
    members = []
    for interface_declaration in symbol.declarations if symbol is not None else [declaration]:
        if interface_declaration.kind != "interface_declaration":
            continue
        body = interface_declaration.child("body")
        for member in body.named_children if body is not None else []:
            resolved = expressions.resolve_member_signature(member, symbol, context)
            if resolved is not None:
                members.append(resolved)
    return InterfaceKind(text=text, name=name, type_parameters=type_parameters, members=members)


def get_export_type(checker, symbol: Symbol) -> Type:
    declaration = get_primary_declaration(symbol)
    if declaration is not None and declaration.kind in TYPE_ONLY_DECLARATIONS:
        return checker.get_declared_type_of_symbol(symbol)
    return checker.get_type_of_symbol(symbol)


def resolve_namespace(declaration: SyntaxNode, name: str | None, text: str, context: ResolutionContext) -> NamespaceKind:
    checker = context.checker
    symbol = checker.get_symbol_of_declaration(declaration)
    types: list[Kind] = []
    exports = checker.get_exports_of_symbol(symbol) if symbol is not None else {}
    for export in exports.values():
        export_declaration = get_primary_declaration(export)
        if export_declaration is None:
            continue
        if not context.filter(get_symbol_metadata(checker, export, export_declaration)):
            continue
        resolved = resolve_declaration(get_export_type(checker, export), export_declaration, context)
        if resolved is not None:
            types.append(resolved)
    return NamespaceKind(text=text, name=name, types=types)
