"""In-memory model of a decoded API schema.

Built once by the loader and treated as read-only for the rest of the run.
Mappings keep the order of the JSON document, which is also the output order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Security requirement key that selects HTTP basic auth; anything else is bearer.
BASIC_AUTH_SCHEME = "BasicAuth"


class PropertyKind(str, Enum):
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    REF = "ref"


SCALAR_KINDS = frozenset({
    PropertyKind.INTEGER,
    PropertyKind.NUMBER,
    PropertyKind.BOOLEAN,
    PropertyKind.STRING,
})


@dataclass(frozen=True)
class PropertyType:
    """Type descriptor of a property, parameter, array item or map value.

    ``items`` is the element type of an array and the value type of an
    object (map keys are always strings). ``ref`` is the bare name of the
    referenced definition. ``inline_fields`` marks an object that declares
    its own ``properties`` instead of a map value type.
    """

    kind: PropertyKind
    items: PropertyType | None = None
    ref: str | None = None
    description: str = ""
    title: str = ""
    inline_fields: bool = False


@dataclass(frozen=True)
class Definition:
    name: str
    description: str = ""
    title: str = ""
    enum: tuple[str, ...] = ()
    properties: dict[str, PropertyType] = field(default_factory=dict)

    @property
    def is_enum(self) -> bool:
        return len(self.enum) > 0

    @property
    def doc(self) -> str:
        return self.description or self.title


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True)
class Parameter:
    name: str
    location: ParameterLocation
    type: PropertyType
    required: bool = False


class AuthScheme(str, Enum):
    BASIC = "basic"
    BEARER = "bearer"


@dataclass(frozen=True)
class Operation:
    operation_id: str
    summary: str = ""
    parameters: tuple[Parameter, ...] = ()
    response_ref: str | None = None
    security: tuple[tuple[str, ...], ...] = ()

    @property
    def auth_scheme(self) -> AuthScheme:
        """Only the first security requirement counts; none means bearer."""
        if self.security and BASIC_AUTH_SCHEME in self.security[0]:
            return AuthScheme.BASIC
        return AuthScheme.BEARER


@dataclass(frozen=True)
class Schema:
    definitions: dict[str, Definition] = field(default_factory=dict)
    paths: dict[str, dict[str, Operation]] = field(default_factory=dict)
    sub_namespace: str | None = None
