"""
Call signatures, parameters and type parameters.
"""

import logging
from typing import Any

from ..models.kind_models import (
    PRIMITIVE_KINDS,
    CallSignatureKind,
    ComponentTypeKind,
    FunctionTypeKind,
    ParameterKind,
    TypeExpression,
    TypeParameterKind,
)
from ..semantic.binder import Symbol
from ..semantic.jsdoc import get_parameter_description
from ..semantic.syntax import SyntaxNode, unwrap_type_node
from ..semantic.types import Signature, Type, TypeParameter
from . import expressions
from .context import ResolutionContext
from .declarations import get_primary_declaration, is_dependency_file
from .errors import MissingDeclarationError
from .literals import get_binding_pattern_defaults, get_initializer_value

logger = logging.getLogger(__name__)

GENERATOR_DECLARATIONS = ("generator_function_declaration", "generator_function")


def is_promise_like(kind: TypeExpression | None) -> bool:
    if kind is None:
        return False
    if kind.kind == "TypeReference":
        return kind.text == "Promise" or kind.text.startswith("Promise<")
    if kind.kind in ("UnionType", "IntersectionType"):
        return any(is_promise_like(member) for member in kind.types)
    return False


def is_component(name: str | None, signatures: list[CallSignatureKind]) -> bool:
    """
    Capitalized callables whose every signature takes nothing or a single
    non-primitive props parameter.
    """
    if not name or not name[0].isupper() or not signatures:
        return False
    for signature in signatures:
        if not signature.parameters:
            continue
        if len(signature.parameters) != 1:
            return False
        parameter_type = signature.parameters[0].type
        if parameter_type.kind in PRIMITIVE_KINDS:
            return False
        if parameter_type.kind == "UnionType" and any(member.kind in PRIMITIVE_KINDS for member in parameter_type.types):
            return False
    return True


def resolve_type_parameter(parameter: TypeParameter, context: ResolutionContext) -> TypeParameterKind:
    checker = context.checker
    declaration = parameter.declaration

    constraint = checker.get_constraint_of_type_parameter(parameter)
    constraint_node = None
    default_node = None
    if declaration is not None and declaration.kind == "type_parameter":
        constraint_node = declaration.child("constraint")
        default_node = declaration.child("value")
    elif declaration is not None and declaration.kind == "infer_type" and len(declaration.named_children) > 1:
        constraint_node = declaration.named_children[-1]

    resolved_constraint = None
    if constraint is not None:
        anchor = expressions.pick_anchor(context, constraint_node, None, constraint)
        resolved_constraint = expressions.resolve_type_expression(
            constraint, anchor or expressions.get_declaration_anchor(constraint), context
        )

    default = checker.get_default_from_type_parameter(parameter)
    resolved_default = None
    if default is not None:
        anchor = expressions.pick_anchor(context, default_node, None, default)
        resolved_default = expressions.resolve_type_expression(default, anchor or expressions.get_declaration_anchor(default), context)

    if declaration is not None and declaration.kind == "type_parameter":
        text = declaration.text
    else:
        text = parameter.name if resolved_constraint is None else f"{parameter.name} extends {resolved_constraint.text}"

    return TypeParameterKind(
        text=text,
        name=parameter.name,
        constraint_type=resolved_constraint,
        default_type=resolved_default,
        is_inferred=parameter.is_infer or None,
    )


def get_type_parameters_text(type_parameters: list[TypeParameterKind]) -> str:
    if not type_parameters:
        return ""
    parts = []
    for parameter in type_parameters:
        constraint = f" extends {parameter.constraint_type.text}" if parameter.constraint_type is not None else ""
        parts.append(f"{parameter.name}{constraint}")
    return f"<{', '.join(parts)}>"


def resolve_parameter(parameter: Symbol, context: ResolutionContext) -> ParameterKind | None:
    checker = context.checker
    declaration = parameter.value_declaration or get_primary_declaration(parameter)
    if declaration is None:
        raise MissingDeclarationError(parameter.name, "parameters need a declaration to resolve")

    value_node = declaration.child("value") if declaration.kind in ("required_parameter", "optional_parameter") else None
    initializer = get_initializer_value(value_node, checker)
    default_values = get_binding_pattern_defaults(declaration.child("pattern"), checker)

    type_node = unwrap_type_node(declaration.child("type"))
    symbol_type = checker.get_type_of_symbol(parameter)
    is_optional = parameter.is_optional or value_node is not None
    stripped = checker.remove_undefined(symbol_type) if is_optional else symbol_type

    if type_node is not None and checker.contains_type_parameter(symbol_type):
        resolved = expressions.resolve_type_expression(
            checker.get_type_from_type_node(type_node), type_node, context, default_values
        )
    else:
        anchor = expressions.pick_anchor(context, type_node, None, symbol_type, stripped)
        if anchor is not None:
            resolved = expressions.resolve_type_expression(checker.get_type_from_type_node(anchor), anchor, context, default_values)
        else:
            fallback = expressions.get_declaration_anchor(stripped) or declaration
            resolved = expressions.resolve_type_expression(stripped, fallback, context, default_values)
    if resolved is None:
        logger.debug("Parameter %s has no resolvable type", parameter.name)
        return None
    if is_optional:
        resolved = expressions.filter_undefined_from_union(resolved)

    name: str | None = parameter.name
    if name.startswith("__"):
        name = None

    return ParameterKind(
        text=declaration.text,
        name=name,
        type=resolved,
        initializer=initializer,
        is_optional=is_optional or None,
        is_rest=parameter.is_rest or None,
        description=get_parameter_description(declaration, name),
        **expressions.location_fields(declaration, context),
    )


def resolve_this_type(signature: Signature, context: ResolutionContext) -> TypeExpression | None:
    if signature.this_parameter is None:
        return None
    resolved = resolve_parameter(signature.this_parameter, context)
    return resolved.type if resolved is not None else None


def resolve_return_type(signature: Signature, context: ResolutionContext) -> TypeExpression | None:
    checker = context.checker
    declaration = signature.declaration
    return_type = checker.get_return_type_of_signature(signature)
    return_node = None
    if declaration is not None:
        return_node = declaration.child("return_type")
        if return_node is None and declaration.kind in ("construct_signature", "constructor_type"):
            return_node = declaration.child("type")
    anchor = expressions.pick_anchor(context, return_node, None, return_type)
    if anchor is None:
        anchor = expressions.get_declaration_anchor(return_type) or declaration
    return expressions.resolve_type_expression(return_type, anchor, context)


def is_generator_declaration(declaration: SyntaxNode) -> bool:
    return declaration.kind in GENERATOR_DECLARATIONS or declaration.has_token("*")


def should_resolve_signature(signature: Signature) -> bool:
    """Signatures from dependencies are kept only once they are no longer generic."""
    declaration = signature.declaration
    if declaration is None:
        return False
    return not (is_dependency_file(declaration) and signature.type_parameters)


def resolve_call_signature(
    signature: Signature,
    context: ResolutionContext,
    kind_class: type = CallSignatureKind,
) -> Any:
    if not should_resolve_signature(signature):
        logger.debug("Skipping signature %r", signature)
        return None

    declaration = signature.declaration
    type_parameters = [resolve_type_parameter(parameter, context) for parameter in signature.type_parameters]
    parameters = [resolved for parameter in signature.parameters if (resolved := resolve_parameter(parameter, context)) is not None]
    return_type = resolve_return_type(signature, context)

    type_parameters_text = get_type_parameters_text(type_parameters)
    parameters_text = ", ".join(parameter.text for parameter in parameters)
    return_text = return_type.text if return_type is not None else context.checker.type_to_string(
        context.checker.get_return_type_of_signature(signature)
    )
    if declaration.kind in ("function_declaration", "generator_function_declaration"):
        name = declaration.child("name")
        text = f"function {name.text if name else ''}{type_parameters_text}({parameters_text}): {return_text}"
    else:
        text = f"{type_parameters_text}({parameters_text}) => {return_text}"

    return kind_class(
        text=text,
        parameters=parameters,
        type_parameters=type_parameters or None,
        this_type=resolve_this_type(signature, context),
        return_type=return_type,
        is_async=declaration.has_token("async") or is_promise_like(return_type) or None,
        is_generator=is_generator_declaration(declaration) or None,
        **expressions.documentation_fields(declaration),
        **expressions.location_fields(declaration, context),
    )


def resolve_function_type(
    type_: Type,
    signature: Signature,
    context: ResolutionContext,
    owner_name: str | None = None,
) -> FunctionTypeKind | ComponentTypeKind | None:
    """Function type expression; capitalized props-taking functions become component types."""
    resolved = resolve_call_signature(signature, context)
    if resolved is None:
        return None
    shared = {
        "type_parameters": resolved.type_parameters,
        "this_type": resolved.this_type,
        "return_type": resolved.return_type,
        "is_async": resolved.is_async,
        "is_generator": resolved.is_generator,
        "path": resolved.path,
        "position": resolved.position,
    }
    if is_component(owner_name, [resolved]):
        return ComponentTypeKind(
            text=resolved.text,
            parameter=resolved.parameters[0] if resolved.parameters else None,
            **shared,
        )
    return FunctionTypeKind(text=resolved.text, parameters=resolved.parameters, **shared)
