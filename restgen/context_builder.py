"""Build the rendering context from a loaded schema.

Emits one declaration per definition and one function per operation. An
entry that raises SchemaError is logged and skipped, and the error is kept
so the caller can report every problem after the rest has been generated.
A skipped definition is also hidden from everything that references it, so
the output never names an undeclared type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from .definitions import emit_definition
from .errors import SchemaError
from .ir import Declaration, FunctionDecl, HttpMethod
from .model import Definition, Schema
from .operations import emit_operation

logger = logging.getLogger(__name__)


@dataclass
class GenerationContext:
    declarations: list[Declaration] = field(default_factory=list)
    functions: list[FunctionDecl] = field(default_factory=list)
    errors: list[SchemaError] = field(default_factory=list)
    sub_namespace: str | None = None

    @property
    def methods(self) -> list[HttpMethod]:
        """Every HTTP method the shared Method type declares."""
        return list(HttpMethod)

    def as_template_vars(self) -> dict[str, Any]:
        return {
            "declarations": self.declarations,
            "functions": self.functions,
            "methods": self.methods,
            "sub_namespace": self.sub_namespace,
            "declaration_count": len(self.declarations),
            "function_count": len(self.functions),
        }


def _record_error(context: GenerationContext, exc: SchemaError, subject: str) -> None:
    if exc.subject is None:
        exc.subject = subject
    logger.warning("Skipping %s", exc)
    context.errors.append(exc)


def _emit_declarations(
    context: GenerationContext,
    definitions: Mapping[str, Definition],
) -> dict[str, Definition]:
    """Emit every definition and return the ones that made it into the output.

    Dropping a definition can break one that was already emitted against it,
    so passes repeat until nothing more is dropped.
    """
    available = dict(definitions)
    emitted: dict[str, Declaration] = {}
    dropped = True
    while dropped:
        dropped = False
        for name, definition in list(available.items()):
            try:
                emitted[name] = emit_definition(name, definition, available)
            except SchemaError as exc:
                _record_error(context, exc, f"definition {name}")
                del available[name]
                emitted.pop(name, None)
                dropped = True

    context.declarations.extend(emitted[name] for name in available)
    return available


def build_context(schema: Schema, operation_prefix: str | None = None) -> GenerationContext:
    """Build the full context for the output template."""
    context = GenerationContext(sub_namespace=schema.sub_namespace)
    available = _emit_declarations(context, schema.definitions)

    seen: dict[str, str] = {}
    for url, operations in schema.paths.items():
        for method, operation in operations.items():
            subject = f"{method.upper()} {url}"
            try:
                function = emit_operation(
                    url, method, operation, available, operation_prefix,
                )
                if function.name in seen:
                    raise SchemaError(
                        f"function name {function.name!r} already used by {seen[function.name]}"
                    )
            except SchemaError as exc:
                _record_error(context, exc, subject)
                continue
            seen[function.name] = subject
            context.functions.append(function)

    logger.debug(
        "Built context: %d declarations, %d functions, %d errors",
        len(context.declarations), len(context.functions), len(context.errors),
    )
    return context
