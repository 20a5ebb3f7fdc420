"""Evaluate an emitted function the way the generated client code does.

This is the public way to check a generated client without compiling it.
``build_request`` takes a ``FunctionDecl`` from ``build_context`` and concrete
argument values, and returns the ``RestRequest`` the rendered function would
construct:

    context = build_context(load_schema("api.swagger.json"))
    get_account = next(f for f in context.functions if f.name == "get_account")
    build_request(get_account, bearer_token="...").urlpath  # "/v2/account"

The response type is only a type parameter; no value of it is ever held.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union
from urllib.parse import quote

from .ir import FunctionDecl, HttpMethod
from .model import AuthScheme

Response = TypeVar("Response")


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str


@dataclass(frozen=True)
class BearerAuth:
    token: str


Authentication = Union[BasicAuth, BearerAuth]


@dataclass(frozen=True)
class RestRequest(Generic[Response]):
    authentication: Authentication
    urlpath: str
    query_params: str
    body: str
    method: HttpMethod


def to_text(value: Any) -> str:
    """Canonical text of a scalar: ``true``/``false``, ``3``, ``1.5``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode(value: Any) -> str:
    """Percent-encode everything except unreserved characters."""
    return quote(to_text(value), safe="")


def to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=_json_default)


def _json_default(value: Any) -> Any:
    if hasattr(value, "__dict__"):
        return vars(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def build_request(function: FunctionDecl, **arguments: Any) -> RestRequest[Any]:
    """Build the request descriptor for one call of ``function``.

    Required arguments must be given; optional query arguments default to
    absent and sequence query arguments to empty.
    """
    known = {argument.name for argument in function.arguments}
    unexpected = sorted(set(arguments) - known)
    if unexpected:
        raise TypeError(f"{function.name}() got unexpected arguments: {', '.join(unexpected)}")

    values: dict[str, Any] = {}
    for argument in function.arguments:
        if argument.name in arguments:
            values[argument.name] = arguments[argument.name]
        elif argument.optional:
            values[argument.name] = None
        elif any(q.argument == argument.name and q.repeated for q in function.query):
            values[argument.name] = ()
        else:
            raise TypeError(f"{function.name}() missing required argument {argument.name!r}")

    urlpath = function.path
    for substitution in function.path_substitutions:
        urlpath = urlpath.replace(substitution.placeholder, to_text(values[substitution.argument]))

    query_params = ""
    for append in function.query:
        value = values[append.argument]
        elements = (value or ()) if append.repeated else ([] if value is None else [value])
        for element in elements:
            text = encode(element) if append.url_encoded else to_text(element)
            query_params += f"{append.key}={text}&"

    authentication: Authentication
    if function.auth is AuthScheme.BASIC:
        authentication = BasicAuth(values["basic_auth_username"], values["basic_auth_password"])
    else:
        authentication = BearerAuth(values["bearer_token"])

    body = ""
    if function.body is not None:
        payload = values[function.body.argument]
        body = str(payload) if function.body.raw else to_json(payload)

    return RestRequest(
        authentication=authentication,
        urlpath=urlpath,
        query_params=query_params,
        body=body,
        method=function.method,
    )
