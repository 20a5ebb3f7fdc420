"""Load a Swagger-style API schema and decode it into the schema model.

Only the parts code generation needs are read: ``definitions`` and
``paths``. Anything of the wrong shape is a DecodeError.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import DecodeError, LoadError
from .model import (
    Definition,
    Operation,
    Parameter,
    ParameterLocation,
    PropertyKind,
    PropertyType,
    Schema,
)
from .naming import ref_name

logger = logging.getLogger(__name__)

# Status code whose response schema becomes the function's response type.
SUCCESS_STATUS = "200"

# Path item keys that are not HTTP methods.
_PATH_ITEM_FIELDS = frozenset({"parameters", "$ref"})


def load_schema(path: Path | str, sub_namespace: str | None = None) -> Schema:
    """Read ``path`` as UTF-8 JSON and decode it into a Schema."""
    schema_file = Path(path)
    try:
        content = schema_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Unable to read file {schema_file}: {exc}") from exc

    try:
        document = json.loads(content)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Unable to decode input file {schema_file}: {exc}") from exc

    schema = parse_schema(document, sub_namespace=sub_namespace)
    logger.debug(
        "Loaded %s: %d definitions, %d paths",
        schema_file, len(schema.definitions), len(schema.paths),
    )
    return schema


def parse_schema(document: Any, sub_namespace: str | None = None) -> Schema:
    """Decode an already-parsed JSON document into a Schema."""
    _expect_object(document, "schema root")

    definitions = {
        name: _parse_definition(name, raw)
        for name, raw in _get_object(document, "definitions", "schema root").items()
    }

    paths: dict[str, dict[str, Operation]] = {}
    for url, path_item in _get_object(document, "paths", "schema root").items():
        _expect_object(path_item, f"path {url}")
        shared = _get_list(path_item, "parameters", f"path {url}")
        paths[url] = {
            method.lower(): _parse_operation(f"{method.upper()} {url}", raw, shared)
            for method, raw in path_item.items()
            if method not in _PATH_ITEM_FIELDS and not method.startswith("x-")
        }

    return Schema(definitions=definitions, paths=paths, sub_namespace=sub_namespace)


def _expect_object(value: Any, where: str) -> None:
    if not isinstance(value, dict):
        raise DecodeError(f"{where}: expected a JSON object, got {type(value).__name__}")


def _get_object(node: dict[str, Any], key: str, where: str) -> dict[str, Any]:
    value = node.get(key)
    if value is None:
        return {}
    _expect_object(value, f"{where}.{key}")
    return value


def _get_list(node: dict[str, Any], key: str, where: str) -> list[Any]:
    value = node.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"{where}.{key}: expected a list")
    return value


def _get_string(node: dict[str, Any], key: str, where: str) -> str:
    value = node.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"{where}.{key}: expected a string")
    return value


def _parse_property(raw: Any, where: str) -> PropertyType:
    """Decode a property, array item, map value or body schema."""
    _expect_object(raw, where)
    description = _get_string(raw, "description", where)
    title = _get_string(raw, "title", where)

    if raw.get("$ref"):
        return PropertyType(
            PropertyKind.REF,
            ref=ref_name(_get_string(raw, "$ref", where)),
            description=description,
            title=title,
        )

    type_name = raw.get("type")
    if type_name == "array":
        items = _parse_property(raw.get("items", {"type": "string"}), f"{where}.items")
        return PropertyType(PropertyKind.ARRAY, items=items, description=description, title=title)
    if type_name == "object":
        values = raw.get("additionalProperties")
        if isinstance(values, dict) and values:
            value_type = _parse_property(values, f"{where}.additionalProperties")
            return PropertyType(PropertyKind.OBJECT, items=value_type, description=description, title=title)
        # Declared properties are not a map; resolving them is a SchemaError.
        return PropertyType(
            PropertyKind.OBJECT,
            items=PropertyType(PropertyKind.STRING),
            description=description,
            title=title,
            inline_fields=bool(_get_object(raw, "properties", where)),
        )
    if type_name in ("integer", "number", "boolean", "string"):
        return PropertyType(PropertyKind(type_name), description=description, title=title)

    raise DecodeError(f"{where}: unsupported type {type_name!r}")


def _parse_definition(name: str, raw: Any) -> Definition:
    where = f"definition {name}"
    _expect_object(raw, where)

    enum = _get_list(raw, "enum", where)

    properties: dict[str, PropertyType] = {}
    if not enum:
        properties = {
            prop_name: _parse_property(prop, f"{where}.{prop_name}")
            for prop_name, prop in _get_object(raw, "properties", where).items()
        }

    return Definition(
        name=name,
        description=_get_string(raw, "description", where),
        title=_get_string(raw, "title", where),
        enum=tuple(str(value) for value in enum),
        properties=properties,
    )


def _parse_parameter(raw: Any, where: str) -> Parameter:
    _expect_object(raw, where)
    name = _get_string(raw, "name", where)
    if not name:
        raise DecodeError(f"{where}: parameter without a name")
    where = f"{where} {name}"

    try:
        location = ParameterLocation(raw.get("in"))
    except ValueError:
        raise DecodeError(f"{where}: unsupported parameter location {raw.get('in')!r}") from None

    if location is ParameterLocation.BODY:
        param_type = _parse_property(raw.get("schema", {}), f"{where}.schema")
    else:
        param_type = _parse_property(raw, where)

    return Parameter(
        name=name,
        location=location,
        type=param_type,
        required=bool(raw.get("required", False)),
    )


def _parse_operation(where: str, raw: Any, shared: list[Any]) -> Operation:
    """Decode one operation; path-level ``shared`` parameters come first
    unless the operation redeclares the same name and location."""
    _expect_object(raw, where)

    own = _get_list(raw, "parameters", where)
    parameters = [
        _parse_parameter(param, f"{where} parameter") for param in shared
    ]
    for param in (_parse_parameter(p, f"{where} parameter") for p in own):
        parameters = [
            p for p in parameters
            if (p.name, p.location) != (param.name, param.location)
        ]
        parameters.append(param)

    responses = _get_object(raw, "responses", where)
    success = _get_object(responses, SUCCESS_STATUS, f"{where}.responses")
    response_schema = _get_object(success, "schema", f"{where}.responses.{SUCCESS_STATUS}")
    response_ref = response_schema.get("$ref")

    security = _get_list(raw, "security", where)
    if not all(isinstance(s, dict) for s in security):
        raise DecodeError(f"{where}.security: expected a list of objects")

    return Operation(
        operation_id=_get_string(raw, "operationId", where),
        summary=_get_string(raw, "summary", where),
        parameters=tuple(parameters),
        response_ref=ref_name(response_ref) if response_ref else None,
        security=tuple(tuple(requirement) for requirement in security),
    )
