"""Intermediate representation handed from the generator core to a renderer.

Everything here is target-neutral data: a renderer decides how a
``TypeKind.INT32`` or a ``QueryAppend`` is spelled in its language.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .model import AuthScheme, ParameterLocation


class TypeKind(str, Enum):
    INT32 = "int32"
    FLOAT32 = "float32"
    BOOL = "bool"
    STRING = "string"
    LIST = "list"
    MAP = "map"
    ENUM = "enum"
    RECORD = "record"


@dataclass(frozen=True)
class ResolvedType:
    """An emitted type. ``inner`` is the element (LIST) or value (MAP) type,
    ``name`` the declared type name of an ENUM or RECORD."""

    kind: TypeKind
    inner: ResolvedType | None = None
    name: str | None = None


@dataclass(frozen=True)
class TypeDefault:
    """Default of a field whose type is another declaration: that type's own default."""

    name: str


class HttpMethod(str, Enum):
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    HEAD = "head"


@dataclass(frozen=True)
class EnumVariant:
    name: str
    tag: int
    description: str | None = None


@dataclass(frozen=True)
class EnumDecl:
    name: str
    description: str
    variants: tuple[EnumVariant, ...]

    is_enum = True


@dataclass(frozen=True)
class RecordField:
    name: str
    wire_name: str
    type: ResolvedType
    optional: bool
    default: Any
    description: str = ""


@dataclass(frozen=True)
class RecordDecl:
    name: str
    description: str
    fields: tuple[RecordField, ...]

    is_enum = False


Declaration = Union[EnumDecl, RecordDecl]


@dataclass(frozen=True)
class Argument:
    """A generated function argument. ``location`` is None for auth arguments."""

    name: str
    type: ResolvedType
    optional: bool = False
    location: ParameterLocation | None = None
    wire_name: str | None = None


@dataclass(frozen=True)
class PathSubstitution:
    placeholder: str
    argument: str


@dataclass(frozen=True)
class QueryAppend:
    """Append ``key=value&`` when the argument is present.

    ``repeated`` arguments are sequences and append one pair per element.
    """

    key: str
    argument: str
    repeated: bool = False
    url_encoded: bool = False


@dataclass(frozen=True)
class Body:
    """``raw`` bodies are passed through as text, others are serialized as JSON."""

    argument: str
    raw: bool


@dataclass(frozen=True)
class FunctionDecl:
    name: str
    summary: str
    method: HttpMethod
    path: str
    auth: AuthScheme
    arguments: tuple[Argument, ...]
    path_substitutions: tuple[PathSubstitution, ...] = ()
    query: tuple[QueryAppend, ...] = ()
    body: Body | None = None
    response: str | None = None
