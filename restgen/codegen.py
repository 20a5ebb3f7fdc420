"""Render the generation context through a Jinja2 template and write it out.

The core only produces target-neutral declarations; the filters below spell
them in Rust for ``client.rs.j2``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import jinja2

from .context_builder import GenerationContext
from .errors import TemplateError, WriteError
from .ir import Argument, RecordField, ResolvedType, TypeKind
from .model import ParameterLocation
from .naming import camel_to_pascal, strip_newlines

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "client.rs.j2"

_RUST_SCALARS: dict[TypeKind, str] = {
    TypeKind.INT32: "i32",
    TypeKind.FLOAT32: "f32",
    TypeKind.BOOL: "bool",
    TypeKind.STRING: "String",
}

_RUST_KEYWORDS = frozenset({
    "as", "async", "await", "break", "const", "continue", "dyn", "else",
    "enum", "extern", "false", "fn", "for", "if", "impl", "in", "let",
    "loop", "match", "mod", "move", "mut", "pub", "ref", "return", "static",
    "struct", "trait", "true", "type", "unsafe", "use", "where", "while",
    "abstract", "become", "box", "do", "final", "macro", "override", "priv",
    "try", "typeof", "unsized", "virtual", "yield",
})

# Keywords that cannot be written as raw identifiers.
_RUST_RESERVED = frozenset({"self", "Self", "super", "crate"})


def rust_type(resolved: ResolvedType) -> str:
    if resolved.kind in _RUST_SCALARS:
        return _RUST_SCALARS[resolved.kind]
    if resolved.kind is TypeKind.LIST:
        return f"Vec<{rust_type(resolved.inner)}>"
    if resolved.kind is TypeKind.MAP:
        return f"HashMap<String, {rust_type(resolved.inner)}>"
    if resolved.kind in (TypeKind.ENUM, TypeKind.RECORD):
        return resolved.name
    raise AssertionError(f"unhandled type kind {resolved.kind!r}")


def rust_field_type(field: RecordField) -> str:
    if field.optional:
        return f"Option<{rust_type(field.type)}>"
    return rust_type(field.type)


def rust_arg_type(argument: Argument) -> str:
    """Strings are borrowed, query sequences are slices, the rest by value."""
    resolved = argument.type
    if resolved.kind is TypeKind.STRING:
        type_name = "&str"
    elif resolved.kind is TypeKind.LIST and argument.location is ParameterLocation.QUERY:
        type_name = f"&[{rust_type(resolved.inner)}]"
    else:
        type_name = rust_type(resolved)
    if argument.optional:
        return f"Option<{type_name}>"
    return type_name


def rust_ident(name: str) -> str:
    if name in _RUST_RESERVED:
        return f"{name}_"
    if name in _RUST_KEYWORDS:
        return f"r#{name}"
    return name


def is_renamed(field: RecordField) -> bool:
    """True when the Rust field name differs from the JSON key."""
    return rust_ident(field.name).removeprefix("r#") != field.wire_name


def rust_str(text: str) -> str:
    """Quote ``text`` as a Rust string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_environment(template_dir: Path = TEMPLATE_DIR) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters.update({
        "rust_type": rust_type,
        "rust_field_type": rust_field_type,
        "rust_arg_type": rust_arg_type,
        "rust_ident": rust_ident,
        "rust_str": rust_str,
        "pascal": camel_to_pascal,
        "one_line": strip_newlines,
    })
    env.tests["renamed"] = is_renamed
    return env


def render(
    context: GenerationContext,
    template_name: str = DEFAULT_TEMPLATE,
    template_dir: Path = TEMPLATE_DIR,
) -> str:
    """Render ``context`` through ``template_name`` and return the text."""
    env = build_environment(template_dir)
    try:
        template = env.get_template(template_name)
        return template.render(**context.as_template_vars())
    except jinja2.TemplateError as exc:
        raise TemplateError(f"Template {template_name} failed: {exc}") from exc


def write(text: str, destination: Path | None = None, stream: Any = None) -> None:
    """Write ``text`` to ``destination``, or to stdout when it is None."""
    if destination is None:
        (stream or sys.stdout).write(text)
        return
    try:
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Unable to write {destination}: {exc}") from exc
