"""Decide whether a referenced type is expanded in place or kept as a shallow reference."""

import logging

from ..semantic.binder import Symbol
from ..semantic.syntax import SyntaxNode
from ..semantic.types import TupleType, Type, TypeReference
from .context import ResolutionContext
from .declarations import is_dependency_file
from .symbol_metadata import is_declaration_exported

logger = logging.getLogger(__name__)


def get_type_symbol(type_: Type) -> Symbol | None:
    return type_.alias_symbol or type_.symbol


def get_type_arguments(type_: Type) -> list[Type]:
    """Alias type arguments when the type came from a generic alias, otherwise reference arguments."""
    if type_.alias_symbol is not None:
        return list(type_.alias_type_arguments)
    if isinstance(type_, TypeReference):
        return list(type_.type_arguments)
    return []


def is_local_symbol(symbol: Symbol) -> bool:
    return bool(symbol.declarations) and not any(is_dependency_file(d) for d in symbol.declarations)


def is_local_declaration(context: ResolutionContext, symbol: Symbol | None) -> bool:
    """Declared only in project files and never exported."""
    if symbol is None or not is_local_symbol(symbol):
        return False
    return not any(context.checker.is_declaration_exported(d) for d in symbol.declarations)


def has_local_type_argument(context: ResolutionContext, type_: Type) -> bool:
    return any(is_local_declaration(context, get_type_symbol(argument)) for argument in get_type_arguments(type_))


def is_array_like(type_: Type) -> bool:
    return isinstance(type_, TupleType) or (isinstance(type_, TypeReference) and type_.is_array())


def should_expand(type_: Type, enclosing_node: SyntaxNode | None, context: ResolutionContext) -> bool:
    if context.is_resolving(type_):
        return False
    checker = context.checker
    if checker.contains_type_parameter(type_):
        return False
    if is_array_like(type_):
        return True

    symbol = get_type_symbol(type_)
    if symbol is None or not symbol.declarations:
        return True

    if is_local_symbol(symbol):
        if has_local_type_argument(context, type_):
            return True
        return not any(is_declaration_exported(checker, d, enclosing_node) for d in symbol.declarations)

    arguments = get_type_arguments(type_)
    if not arguments or not has_local_type_argument(context, type_):
        return False
    if any(context.policy.is_trivial_type(checker, argument) for argument in arguments):
        logger.debug("Keeping %s as a reference: trivial type argument", symbol.name)
        return False
    return True
