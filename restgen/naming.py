"""Convert identifiers between camelCase, PascalCase and snake_case.

Schema keys mix conventions freely ("apiAccount", "GroupUserList",
"create_time"), so every emitted name goes through one of these.

Examples:
  camel_to_snake("UserId")                       -> "user_id"
  camel_to_snake("HTTPStatus")                   -> "h_t_t_p_status"
  snake_to_pascal("group_user")                  -> "GroupUser"
  clean_ref("#/definitions/apiAccount")          -> "ApiAccount"
  build_function_name("Nakama_AuthenticateEmail") -> "authenticate_email"
"""

from __future__ import annotations

import re

DEFINITION_REF_PREFIX = "#/definitions/"

# gRPC-gateway operation ids look like "Service_MethodName".
_SERVICE_PREFIX = re.compile(r"^[A-Z][A-Za-z0-9]*_(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case.

    Every uppercase letter after the first character starts a new word;
    acronyms are not special-cased.
    """
    out = []
    for i, char in enumerate(name):
        if char.isupper():
            if i != 0:
                out.append("_")
            out.append(char.lower())
        else:
            out.append(char)
    return "".join(out)


def pascal_to_camel(name: str) -> str:
    if not name:
        return ""
    return name[0].lower() + name[1:]


def camel_to_pascal(name: str) -> str:
    if not name:
        return ""
    return name[0].upper() + name[1:]


def _join_snake(name: str) -> str:
    """Drop single underscores and upper-case the character after each.

    A doubled underscore keeps one underscore and a trailing one is kept.
    """
    out = []
    upper_next = False
    for i, char in enumerate(name):
        if upper_next:
            out.append(char.upper())
            upper_next = False
        elif char == "_" and 0 < i < len(name) - 1:
            upper_next = True
        else:
            out.append(char)
    return "".join(out)


def snake_to_camel(name: str) -> str:
    return pascal_to_camel(_join_snake(name))


def snake_to_pascal(name: str) -> str:
    return camel_to_pascal(_join_snake(name))


def strip_newlines(text: str) -> str:
    """Collapse a multi-line description onto one line for doc comments."""
    return text.replace("\r\n", " ").replace("\n", " ")


def ref_name(ref: str) -> str:
    """Return the bare definition name of a "#/definitions/..." pointer."""
    if ref.startswith(DEFINITION_REF_PREFIX):
        return ref[len(DEFINITION_REF_PREFIX):]
    return ref


def clean_ref(ref: str) -> str:
    """Return the emitted type name for a definition name or pointer."""
    return camel_to_pascal(ref_name(ref))


def strip_operation_prefix(operation_id: str, prefix: str | None = None) -> str:
    """Strip the service prefix from an operation id.

    With an explicit ``prefix`` only that prefix is removed (once, and only
    at the start). Otherwise a leading "Service_" segment is removed when it
    is followed by a PascalCase method name.
    """
    if prefix is not None:
        if prefix and operation_id.startswith(prefix):
            return operation_id[len(prefix):]
        return operation_id
    return _SERVICE_PREFIX.sub("", operation_id, count=1)


def build_function_name(operation_id: str, prefix: str | None = None) -> str:
    """Build the snake_case function name for an operation id."""
    return camel_to_snake(pascal_to_camel(strip_operation_prefix(operation_id, prefix)))
