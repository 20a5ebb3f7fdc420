"""Emit enum and record declarations from schema definitions."""

from __future__ import annotations

from typing import Mapping

from .ir import Declaration, EnumDecl, EnumVariant, RecordDecl, RecordField
from .model import Definition
from .naming import camel_to_snake, clean_ref, strip_newlines
from .schema_parser import default_value, resolve_type


def emit_definition(
    name: str,
    definition: Definition,
    definitions: Mapping[str, Definition],
) -> Declaration:
    """Emit the declaration for one definition.

    Raises SchemaError if a property references an unknown definition.
    """
    if definition.is_enum:
        return emit_enum(name, definition)
    return emit_record(name, definition, definitions)


def emit_enum(name: str, definition: Definition) -> EnumDecl:
    """Variants keep schema order and are tagged 0, 1, 2, ...

    Line ``i`` of the description documents variant ``i``; variants past the
    last line stay undocumented.
    """
    lines = definition.doc.split("\n") if definition.doc else []
    variants = tuple(
        EnumVariant(
            name=variant,
            tag=tag,
            description=(lines[tag].strip() or None) if tag < len(lines) else None,
        )
        for tag, variant in enumerate(definition.enum)
    )
    return EnumDecl(
        name=clean_ref(name),
        description=strip_newlines(definition.doc),
        variants=variants,
    )


def emit_record(
    name: str,
    definition: Definition,
    definitions: Mapping[str, Definition],
) -> RecordDecl:
    fields = []
    for prop_name, prop in definition.properties.items():
        resolved, optional = resolve_type(prop, definitions)
        fields.append(RecordField(
            name=camel_to_snake(prop_name),
            wire_name=prop_name,
            type=resolved,
            optional=optional,
            default=default_value(resolved, optional),
            description=strip_newlines(prop.description or prop.title),
        ))
    return RecordDecl(
        name=clean_ref(name),
        description=strip_newlines(definition.doc),
        fields=tuple(fields),
    )
