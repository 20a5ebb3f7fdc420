"""Resolve schema type descriptors to emitted types.

Mapping:
  integer         -> INT32
  number          -> FLOAT32
  boolean         -> BOOL
  string          -> STRING (optional when the description says so)
  array<T>        -> LIST of resolve(T)
  object<V>       -> MAP from string to resolve(V)
  $ref to enum    -> ENUM by name
  $ref to record  -> RECORD by name

Definition keys in real schemas have inconsistent casing, so a reference
is looked up as written, then in camelCase, then in PascalCase.
"""

from __future__ import annotations

from typing import Any, Mapping

from .errors import SchemaError
from .ir import ResolvedType, TypeDefault, TypeKind
from .model import Definition, PropertyKind, PropertyType
from .naming import camel_to_pascal, clean_ref, pascal_to_camel

# Marker token in a description that makes a string property optional.
OPTIONALITY_MARKER = "optional"

_PRIMITIVES: dict[PropertyKind, TypeKind] = {
    PropertyKind.INTEGER: TypeKind.INT32,
    PropertyKind.NUMBER: TypeKind.FLOAT32,
    PropertyKind.BOOLEAN: TypeKind.BOOL,
    PropertyKind.STRING: TypeKind.STRING,
}

_EMPTY_DEFAULTS: dict[TypeKind, Any] = {
    TypeKind.INT32: 0,
    TypeKind.FLOAT32: 0.0,
    TypeKind.BOOL: False,
    TypeKind.STRING: "",
}


def is_optional_by_convention(description: str) -> bool:
    """Whether a string property is optional, judged by its description text.

    This is a text heuristic, not a structural flag: any description that
    contains the marker counts, including ones that merely mention it.
    """
    return OPTIONALITY_MARKER in description


def find_definition(definitions: Mapping[str, Definition], ref: str) -> Definition:
    """Look up a referenced definition, tolerating camel/Pascal case keys."""
    for candidate in (ref, pascal_to_camel(ref), camel_to_pascal(ref)):
        if candidate in definitions:
            return definitions[candidate]
    raise SchemaError(f"no definition found for reference {ref!r}")


def resolve_type(
    prop: PropertyType,
    definitions: Mapping[str, Definition],
) -> tuple[ResolvedType, bool]:
    """Resolve a type descriptor to ``(emitted type, optional)``."""
    kind = prop.kind

    if kind in _PRIMITIVES:
        optional = kind is PropertyKind.STRING and is_optional_by_convention(prop.description)
        return ResolvedType(_PRIMITIVES[kind]), optional

    if kind is PropertyKind.ARRAY:
        inner, _ = resolve_type(_inner(prop), definitions)
        return ResolvedType(TypeKind.LIST, inner=inner), False

    if kind is PropertyKind.OBJECT:
        if prop.inline_fields:
            raise SchemaError("inline object schemas are not supported; reference a definition instead")
        inner, _ = resolve_type(_inner(prop), definitions)
        return ResolvedType(TypeKind.MAP, inner=inner), False

    if kind is PropertyKind.REF:
        definition = find_definition(definitions, prop.ref or "")
        type_kind = TypeKind.ENUM if definition.is_enum else TypeKind.RECORD
        return ResolvedType(type_kind, name=clean_ref(definition.name)), False

    raise AssertionError(f"unhandled property kind {kind!r}")


def _inner(prop: PropertyType) -> PropertyType:
    # Arrays and maps without an explicit item schema hold strings.
    return prop.items or PropertyType(PropertyKind.STRING)


def default_value(resolved: ResolvedType, optional: bool = False) -> Any:
    """Canonical empty value of an emitted type."""
    if optional:
        return None
    if resolved.kind in _EMPTY_DEFAULTS:
        return _EMPTY_DEFAULTS[resolved.kind]
    if resolved.kind is TypeKind.LIST:
        return []
    if resolved.kind is TypeKind.MAP:
        return {}
    if resolved.kind in (TypeKind.ENUM, TypeKind.RECORD):
        return TypeDefault(resolved.name or "")
    raise AssertionError(f"unhandled type kind {resolved.kind!r}")
