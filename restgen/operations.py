"""Emit one request-building function per API operation.

A generated function takes the auth arguments first, then one argument per
declared parameter, and returns a request descriptor:

  POST /v2/account/authenticate/email  (security: BasicAuth)
    -> authenticate_email(basic_auth_username, basic_auth_password,
                          account, create=None, username=None)

Path parameters are substituted into the URL template, query parameters are
appended as ``key=value&`` when present, and at most one body parameter
becomes the request body.
"""

from __future__ import annotations

import re
from typing import Mapping

from .errors import SchemaError
from .ir import (
    Argument,
    Body,
    FunctionDecl,
    HttpMethod,
    PathSubstitution,
    QueryAppend,
    ResolvedType,
    TypeKind,
)
from .model import (
    SCALAR_KINDS,
    AuthScheme,
    Definition,
    Operation,
    Parameter,
    ParameterLocation,
    PropertyKind,
)
from .naming import build_function_name, camel_to_snake, clean_ref, strip_newlines
from .schema_parser import find_definition, resolve_type

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")

_STRING = ResolvedType(TypeKind.STRING)

# Locals of every generated function body.
_GENERATED_LOCALS = frozenset({"urlpath", "query_params", "authentication", "body_json"})

_AUTH_ARGUMENTS: dict[AuthScheme, tuple[Argument, ...]] = {
    AuthScheme.BASIC: (
        Argument("basic_auth_username", _STRING),
        Argument("basic_auth_password", _STRING),
    ),
    AuthScheme.BEARER: (
        Argument("bearer_token", _STRING),
    ),
}


def path_placeholders(url: str) -> list[str]:
    """Return the placeholder names of a URL template in order."""
    return _PLACEHOLDER.findall(url)


def _path_argument(param: Parameter, definitions: Mapping[str, Definition]) -> Argument:
    if param.type.kind not in SCALAR_KINDS:
        raise SchemaError(f"path parameter {param.name!r} must be a scalar")
    resolved, _ = resolve_type(param.type, definitions)
    return Argument(
        camel_to_snake(param.name), resolved,
        location=ParameterLocation.PATH, wire_name=param.name,
    )


def _body_argument(param: Parameter, definitions: Mapping[str, Definition]) -> Argument:
    if param.type.kind is PropertyKind.STRING:
        resolved = _STRING
    else:
        resolved, _ = resolve_type(param.type, definitions)
    return Argument(
        camel_to_snake(param.name), resolved,
        location=ParameterLocation.BODY, wire_name=param.name,
    )


def _query_argument(param: Parameter, definitions: Mapping[str, Definition]) -> Argument:
    """Scalars are optional regardless of ``required``; arrays are sequences
    where an empty sequence means absent."""
    kind = param.type.kind
    if kind is PropertyKind.ARRAY:
        items = param.type.items
        if items is not None and items.kind not in SCALAR_KINDS:
            raise SchemaError(f"query parameter {param.name!r} must be an array of scalars")
        resolved, _ = resolve_type(param.type, definitions)
        optional = False
    elif kind in SCALAR_KINDS:
        resolved, _ = resolve_type(param.type, definitions)
        optional = True
    else:
        raise SchemaError(f"query parameter {param.name!r} has unsupported type {kind.value!r}")
    return Argument(
        camel_to_snake(param.name), resolved, optional=optional,
        location=ParameterLocation.QUERY, wire_name=param.name,
    )


def _query_append(argument: Argument) -> QueryAppend:
    repeated = argument.type.kind is TypeKind.LIST
    value_type = argument.type.inner if repeated else argument.type
    return QueryAppend(
        key=argument.wire_name or argument.name,
        argument=argument.name,
        repeated=repeated,
        url_encoded=value_type is not None and value_type.kind is TypeKind.STRING,
    )


def emit_operation(
    url: str,
    method: str,
    operation: Operation,
    definitions: Mapping[str, Definition],
    operation_prefix: str | None = None,
) -> FunctionDecl:
    """Emit the function for one (URL template, method, operation).

    Raises SchemaError when the operation cannot be generated: unknown
    method, unresolvable reference, more than one body parameter, an
    argument named like a generated local, or a URL placeholder without a
    matching path parameter.
    """
    if not operation.operation_id:
        raise SchemaError("operation has no operationId")

    try:
        http_method = HttpMethod(method.lower())
    except ValueError:
        raise SchemaError(f"unsupported HTTP method {method!r}") from None

    arguments = list(_AUTH_ARGUMENTS[operation.auth_scheme])
    substitutions: list[PathSubstitution] = []
    query: list[QueryAppend] = []
    body: Body | None = None

    for param in operation.parameters:
        if param.location is ParameterLocation.PATH:
            argument = _path_argument(param, definitions)
            substitutions.append(PathSubstitution("{" + param.name + "}", argument.name))
        elif param.location is ParameterLocation.QUERY:
            argument = _query_argument(param, definitions)
            query.append(_query_append(argument))
        else:
            if body is not None:
                raise SchemaError(f"more than one body parameter ({body.argument}, {param.name})")
            argument = _body_argument(param, definitions)
            body = Body(argument.name, raw=argument.type.kind is TypeKind.STRING)
        arguments.append(argument)

    names = [argument.name for argument in arguments]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise SchemaError(f"duplicate argument names: {', '.join(duplicates)}")
    shadowed = [name for name in names if name in _GENERATED_LOCALS]
    if shadowed:
        raise SchemaError(f"argument names shadow generated locals: {', '.join(shadowed)}")

    declared = {param.name for param in operation.parameters
                if param.location is ParameterLocation.PATH}
    unmatched = [name for name in path_placeholders(url) if name not in declared]
    if unmatched:
        raise SchemaError(
            f"path placeholders without a path parameter: {', '.join(unmatched)}"
        )

    response = None
    if operation.response_ref:
        response = clean_ref(find_definition(definitions, operation.response_ref).name)

    return FunctionDecl(
        name=build_function_name(operation.operation_id, operation_prefix),
        summary=strip_newlines(operation.summary),
        method=http_method,
        path=url,
        auth=operation.auth_scheme,
        arguments=tuple(arguments),
        path_substitutions=tuple(substitutions),
        query=tuple(query),
        body=body,
        response=response,
    )

