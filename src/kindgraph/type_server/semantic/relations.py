"""
Type relationships: assignability and type argument inference.

Both walks are structural and deliberately forgiving. Assignability answers the
questions conditional types and overload selection ask; inference collects
candidates for type parameters from argument types or ``infer`` positions.
"""

import logging
from typing import TYPE_CHECKING

from .types import (
    SignatureKind,
    TupleElementFlags,
    TupleType,
    Type,
    TypeFlags,
    TypeParameter,
    TypeReference,
)

if TYPE_CHECKING:
    from .checker import TypeChecker

logger = logging.getLogger(__name__)

MAX_RELATION_DEPTH = 20


def _same_reference_target(source: Type, target: Type) -> bool:
    source_target = getattr(source, "target", None)
    target_target = getattr(target, "target", None)
    return (
        source.is_reference()
        and target.is_reference()
        and not source.is_tuple()
        and not target.is_tuple()
        and source_target is not None
        and source_target is target_target
    )


class AssignabilityChecker:
    """Structural assignability with an assumption stack for recursive types."""

    def __init__(self, checker: "TypeChecker"):
        self.checker = checker
        self._maybe: set[tuple[int, int]] = set()
        self._depth = 0

    def is_assignable(self, source: Type, target: Type) -> bool:
        if source is target:
            return True
        if target.flags & (TypeFlags.ANY | TypeFlags.UNKNOWN):
            return True
        if source.is_never():
            return True
        if source.is_any():
            return not target.is_never()
        if target.is_never():
            return False

        if source.is_union():
            return all(self.is_assignable(member, target) for member in source.types)
        if target.is_union():
            return self._is_related_to_some(source, target)
        if target.is_intersection():
            return all(self.is_assignable(source, member) for member in target.types)
        if source.is_intersection():
            if any(self.is_assignable(member, target) for member in source.types):
                return True
            if not target.is_object():
                return False

        if source.flags & TypeFlags.INSTANTIABLE and not (source.is_template_literal() and target.is_template_literal()):
            if target.is_type_parameter():
                return False
            constraint = self.checker.get_base_constraint_of_type(source)
            if constraint is None or constraint is source:
                return False
            return self.is_assignable(constraint, target)
        if target.flags & TypeFlags.INSTANTIABLE and not target.is_template_literal():
            return False

        simple = self._is_simply_assignable(source, target)
        if simple is not None:
            return simple

        if target.is_object():
            if source.is_primitive():
                if source.flags & (TypeFlags.NULL | TypeFlags.UNDEFINED | TypeFlags.VOID):
                    return False
                source = self.checker.get_apparent_type(source)
            if source.is_object() or source.is_non_primitive():
                return self._is_structurally_assignable(source, target)
        return False

    def _is_related_to_some(self, source: Type, target: Type) -> bool:
        members = target.types
        for member in members:
            if member is source:
                return True
        return any(self.is_assignable(source, member) for member in members)

    def _is_simply_assignable(self, source: Type, target: Type) -> bool | None:
        """Primitive and literal relations; None when a structural check is needed."""
        s = source.flags
        t = target.flags
        if target.is_non_primitive():
            return bool(s & (TypeFlags.OBJECT | TypeFlags.NON_PRIMITIVE))
        if t & TypeFlags.STRING:
            return bool(s & TypeFlags.STRING_LIKE)
        if t & TypeFlags.NUMBER:
            return bool(s & (TypeFlags.NUMBER_LIKE | TypeFlags.ENUM_LITERAL)) and not s & TypeFlags.STRING_LITERAL
        if t & TypeFlags.BIGINT:
            return bool(s & (TypeFlags.BIGINT | TypeFlags.BIGINT_LITERAL))
        if t & TypeFlags.ES_SYMBOL:
            return bool(s & (TypeFlags.ES_SYMBOL | TypeFlags.UNIQUE_ES_SYMBOL))
        if t & TypeFlags.VOID:
            return bool(s & (TypeFlags.VOID | TypeFlags.UNDEFINED))
        if t & TypeFlags.UNDEFINED:
            return bool(s & TypeFlags.UNDEFINED)
        if t & TypeFlags.NULL:
            return bool(s & TypeFlags.NULL)
        if target.is_literal() or target.is_enum_literal():
            if not (source.is_literal() or source.is_enum_literal()):
                return False
            return (
                (s & TypeFlags.LITERAL) == (t & TypeFlags.LITERAL)
                and getattr(source, "value", None) == getattr(target, "value", None)
                and type(getattr(source, "value", None)) is type(getattr(target, "value", None))
            )
        if t & TypeFlags.TEMPLATE_LITERAL:
            return bool(s & TypeFlags.STRING_LIKE) and self._matches_template(source, target)
        if target.is_object() and source.is_primitive():
            return None
        if source.is_primitive() and not target.is_object():
            return False
        return None

    def _matches_template(self, source: Type, target: Type) -> bool:
        if not source.is_string_literal():
            return source is target
        value: str = source.value
        texts = target.texts
        if not value.startswith(texts[0]) or not value.endswith(texts[-1]):
            return False
        return len(value) >= len(texts[0]) + len(texts[-1])

    def _is_structurally_assignable(self, source: Type, target: Type) -> bool:
        key = (source.id, target.id)
        if key in self._maybe:
            return True
        if self._depth >= MAX_RELATION_DEPTH:
            return True
        self._maybe.add(key)
        self._depth += 1
        try:
            return self._structured_relation(source, target)
        finally:
            self._depth -= 1
            self._maybe.discard(key)

    def _structured_relation(self, source: Type, target: Type) -> bool:
        checker = self.checker
        if _same_reference_target(source, target):
            return all(
                self.is_assignable(s, t) for s, t in zip(source.type_arguments, target.type_arguments)
            )
        if isinstance(target, TupleType):
            if not isinstance(source, TupleType):
                return False
            return self._tuple_assignable(source, target)
        if isinstance(target, TypeReference) and target.is_array():
            element = target.type_arguments[0] if target.type_arguments else checker.any_type
            if isinstance(source, TupleType):
                if source.readonly and not target.is_readonly_array():
                    return False
                return all(self.is_assignable(checker.get_tuple_element_type(source, i), element) for i in range(len(source.element_types)))
            if isinstance(source, TypeReference) and source.is_array():
                if source.is_readonly_array() and not target.is_readonly_array():
                    return False
                source_element = source.type_arguments[0] if source.type_arguments else checker.any_type
                return self.is_assignable(source_element, element)

        for target_property in checker.get_properties_of_type(target):
            source_property = checker.get_property_of_type(source, target_property.name)
            if source_property is None:
                if target_property.is_optional:
                    continue
                return False
            if not self.is_assignable(checker.get_type_of_symbol(source_property), checker.get_type_of_symbol(target_property)):
                return False

        for kind in (SignatureKind.CALL, SignatureKind.CONSTRUCT):
            target_signatures = checker.get_signatures_of_type(target, kind)
            if not target_signatures:
                continue
            source_signatures = checker.get_signatures_of_type(source, kind)
            if not source_signatures:
                return False
            for target_signature in target_signatures:
                if not any(self._signature_assignable(s, target_signature) for s in source_signatures):
                    return False

        for target_info in checker.get_index_infos_of_type(target):
            source_info = checker.get_applicable_index_info(source, target_info.key_type)
            if source_info is not None:
                if not self.is_assignable(source_info.type, target_info.type):
                    return False
                continue
            for property_ in checker.get_properties_of_type(source):
                if target_info.key_type.is_number() and not property_.name.lstrip("-").isdigit():
                    continue
                if not self.is_assignable(checker.get_type_of_symbol(property_), target_info.type):
                    return False
        return True

    def _tuple_assignable(self, source: TupleType, target: TupleType) -> bool:
        if source.readonly and not target.readonly:
            return False
        source_elements = source.element_types
        target_elements = target.element_types
        target_required = sum(1 for info in target.element_infos if info.flags & TupleElementFlags.REQUIRED)
        if len(source_elements) < target_required:
            return False
        target_has_rest = any(info.flags & TupleElementFlags.REST for info in target.element_infos)
        if len(source_elements) > len(target_elements) and not target_has_rest:
            return False
        for index, element in enumerate(source_elements):
            if index >= len(target_elements):
                target_element = self.checker.get_tuple_element_type(target, len(target_elements) - 1)
            else:
                target_element = self.checker.get_tuple_element_type(target, index)
            if not self.is_assignable(self.checker.get_tuple_element_type(source, index), target_element):
                return False
        return True

    def _signature_assignable(self, source, target) -> bool:
        checker = self.checker
        if source.min_argument_count > len(target.parameters) and not target.has_rest_parameter:
            return False
        target_return = checker.get_return_type_of_signature(target)
        if target_return.is_void() or target_return.is_any():
            return True
        if source.type_parameters:
            source = checker.get_erased_signature(source)
        return self.is_assignable(checker.get_return_type_of_signature(source), target_return)


class InferenceContext:
    """Collects inference candidates for a set of type parameters."""

    def __init__(self, checker: "TypeChecker", type_parameters: list[TypeParameter]):
        self.checker = checker
        self.type_parameters = type_parameters
        self._candidates: dict[int, list[Type]] = {parameter.id: [] for parameter in type_parameters}
        self._visited: set[tuple[int, int]] = set()
        self._depth = 0

    def infer(self, source: Type, target: Type) -> None:
        """Infer from ``source`` into every inferable position of ``target``."""
        if target.is_type_parameter():
            candidates = self._candidates.get(target.id)
            if candidates is not None:
                if not any(candidate is source for candidate in candidates):
                    candidates.append(source)
                return
            return
        if not self.checker.contains_type_parameter(target, deep=True):
            return
        key = (source.id, target.id)
        if key in self._visited or self._depth >= MAX_RELATION_DEPTH:
            return
        self._visited.add(key)
        self._depth += 1
        try:
            self._infer_structured(source, target)
        finally:
            self._depth -= 1

    def _infer_structured(self, source: Type, target: Type) -> None:
        checker = self.checker
        if target.is_union():
            self._infer_to_union(source, target)
            return
        if source.is_union() and not source.is_boolean():
            for member in source.types:
                self.infer(member, target)
            return
        if target.is_intersection():
            for member in target.types:
                self.infer(source, member)
            return
        if target.is_index():
            return
        if target.is_indexed_access() and source.is_indexed_access():
            self.infer(source.object_type, target.object_type)
            self.infer(source.index_type, target.index_type)
            return
        if target.is_conditional():
            true_type, false_type = checker.get_conditional_branch_types(target)
            self.infer(source, true_type)
            self.infer(source, false_type)
            return
        if not source.is_object():
            if source.is_primitive() and target.is_object():
                source = checker.get_apparent_type(source)
            else:
                return

        if _same_reference_target(source, target):
            for s, t in zip(source.type_arguments, target.type_arguments):
                self.infer(s, t)
            return
        if source.is_reference() and target.is_reference() and not target.is_tuple() and not source.is_tuple():
            for base in checker.get_base_types(source):
                if _same_reference_target(base, target):
                    self.infer(base, target)
                    return
        if isinstance(target, TupleType):
            if isinstance(source, TupleType):
                for index, element in enumerate(target.element_types):
                    if target.element_infos[index].flags & TupleElementFlags.REST:
                        rest = source.element_types[index:]
                        self.infer(checker.create_array_type(checker.get_union_type(rest) if rest else checker.never_type), element)
                        break
                    if index < len(source.element_types):
                        self.infer(source.element_types[index], element)
            elif isinstance(source, TypeReference) and source.is_array():
                for index, element in enumerate(target.element_types):
                    if target.element_infos[index].flags & TupleElementFlags.REST:
                        self.infer(source, element)
            return
        if isinstance(target, TypeReference) and target.is_array() and isinstance(source, TupleType):
            element = checker.get_union_type(
                [checker.get_tuple_element_type(source, index) for index in range(len(source.element_types))]
            )
            self.infer(element, target.type_arguments[0] if target.type_arguments else checker.unknown_type)
            return
        if target.is_mapped():
            self._infer_to_mapped_type(source, target)
            return
        self._infer_from_members(source, target)

    def _infer_to_union(self, source: Type, target: Type) -> None:
        naked = [member for member in target.types if member.is_type_parameter() and member.id in self._candidates]
        others = [member for member in target.types if member not in naked]
        sources = source.types if source.is_union() and not source.is_boolean() else [source]
        remaining = []
        for member in sources:
            matched = False
            for other in others:
                if member is other:
                    matched = True
                    break
                if self.checker.contains_type_parameter(other, deep=True) and self._shape_matches(member, other):
                    self.infer(member, other)
                    matched = True
                    break
            if not matched:
                remaining.append(member)
        if naked and remaining:
            remaining_source = self.checker.get_union_type(remaining)
            for parameter in naked:
                self.infer(remaining_source, parameter)

    def _shape_matches(self, source: Type, target: Type) -> bool:
        if _same_reference_target(source, target):
            return True
        if source.is_object() and target.is_object():
            return True
        return False

    def _infer_to_mapped_type(self, source: Type, target: Type) -> None:
        checker = self.checker
        constraint = checker.get_constraint_type_from_mapped_type(target)
        template = checker.get_template_type_from_mapped_type(target)
        if constraint.is_index() and constraint.target.is_type_parameter():
            # Homomorphic ``{ [P in keyof T]: X }``: reverse through the properties
            parameter = constraint.target
            if parameter.id in self._candidates:
                self.infer(source, parameter)
            return
        if constraint.is_type_parameter() and constraint.id in self._candidates:
            keys = [checker.get_string_literal_type(property_.name) for property_ in checker.get_properties_of_type(source)]
            self.infer(checker.get_union_type(keys), constraint)
            property_types = [checker.get_type_of_symbol(property_) for property_ in checker.get_properties_of_type(source)]
            if property_types:
                self.infer(checker.get_union_type(property_types), template)

    def _infer_from_members(self, source: Type, target: Type) -> None:
        checker = self.checker
        for target_property in checker.get_properties_of_type(target):
            source_property = checker.get_property_of_type(source, target_property.name)
            if source_property is not None:
                self.infer(checker.get_type_of_symbol(source_property), checker.get_type_of_symbol(target_property))
        for kind in (SignatureKind.CALL, SignatureKind.CONSTRUCT):
            source_signatures = checker.get_signatures_of_type(source, kind)
            target_signatures = checker.get_signatures_of_type(target, kind)
            if source_signatures and target_signatures:
                self._infer_from_signature(source_signatures[-1], target_signatures[-1])
        for target_info in checker.get_index_infos_of_type(target):
            source_info = checker.get_applicable_index_info(source, target_info.key_type)
            if source_info is not None:
                self.infer(source_info.type, target_info.type)

    def _infer_from_signature(self, source, target) -> None:
        checker = self.checker
        if source.type_parameters:
            source = checker.get_erased_signature(source)
        target_count = len(target.parameters)
        for index, source_parameter in enumerate(source.parameters):
            if index >= target_count:
                break
            target_parameter = target.parameters[index]
            if target_parameter.is_rest and not source_parameter.is_rest:
                rest_types = [checker.get_type_of_symbol(p) for p in source.parameters[index:]]
                labels = [p.name for p in source.parameters[index:]]
                self.infer(checker.create_tuple_type(rest_types, labels=labels), checker.get_type_of_symbol(target_parameter))
                break
            self.infer(checker.get_type_of_symbol(source_parameter), checker.get_type_of_symbol(target_parameter))
        if target_count and target.parameters[-1].is_rest and not source.parameters:
            self.infer(checker.create_tuple_type([]), checker.get_type_of_symbol(target.parameters[-1]))
        self.infer(checker.get_return_type_of_signature(source), checker.get_return_type_of_signature(target))

    def get_inferred_types(self, keep_literals: set[int] | None = None) -> list[Type]:
        """
        One type per parameter: the union of its candidates (literals widened
        unless listed in ``keep_literals``), else its default, else its
        constraint, else ``unknown``.
        """
        checker = self.checker
        inferred = []
        for parameter in self.type_parameters:
            candidates = self._candidates[parameter.id]
            if candidates:
                if keep_literals is None or parameter.id not in keep_literals:
                    candidates = [checker.get_widened_literal_type(candidate) for candidate in candidates]
                inferred.append(checker.get_union_type(candidates))
                continue
            default = checker.get_default_from_type_parameter(parameter)
            if default is not None:
                inferred.append(default)
                continue
            constraint = checker.get_constraint_of_type_parameter(parameter)
            inferred.append(constraint if constraint is not None else checker.unknown_type)
        return inferred
