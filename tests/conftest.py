"""Shared schema fixtures.

``API_DOCUMENT`` is a small Swagger document shaped like a real game-server
API: mixed-case definition keys, an enum, nested records, basic and bearer
auth, and path/query/body parameters.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from restgen.loader import parse_schema
from restgen.model import Schema

API_DOCUMENT: dict[str, Any] = {
    "swagger": "2.0",
    "definitions": {
        "apiAccount": {
            "type": "object",
            "description": "A user with additional account details.",
            "properties": {
                "user": {"$ref": "#/definitions/apiUser"},
                "wallet": {"type": "string"},
                "email": {"type": "string", "description": "The email address, optional."},
                "devices": {"type": "array", "items": {"$ref": "#/definitions/apiAccountDevice"}},
                "customId": {"type": "string"},
                "verifyTime": {"type": "string", "format": "date-time"},
            },
        },
        "apiAccountDevice": {
            "type": "object",
            "properties": {
                "id": {"type": "string"},
                "vars": {"type": "object", "additionalProperties": {"type": "string"}},
            },
        },
        "apiAccountEmail": {
            "type": "object",
            "properties": {
                "email": {"type": "string"},
                "password": {"type": "string"},
                "vars": {"type": "object", "additionalProperties": {"type": "string"}},
            },
        },
        "apiUser": {
            "type": "object",
            "properties": {
                "id": {"type": "string"},
                "username": {"type": "string"},
                "online": {"type": "boolean"},
                "edgeCount": {"type": "integer", "format": "int32"},
                "score": {"type": "number"},
            },
        },
        "apiUsers": {
            "type": "object",
            "properties": {
                "users": {"type": "array", "items": {"$ref": "#/definitions/apiUser"}},
            },
        },
        "apiSession": {
            "type": "object",
            "properties": {
                "created": {"type": "boolean"},
                "token": {"type": "string"},
                "refreshToken": {"type": "string"},
            },
        },
        "StoreProvider": {
            "type": "string",
            "enum": ["APPLE_APP_STORE", "GOOGLE_PLAY_STORE", "HUAWEI_APP_GALLERY"],
            "default": "APPLE_APP_STORE",
            "description": "- APPLE_APP_STORE: Apple App Store\n- GOOGLE_PLAY_STORE: Google Play Store",
        },
        "apiValidatedPurchase": {
            "type": "object",
            "properties": {
                "productId": {"type": "string"},
                "store": {"$ref": "#/definitions/storeProvider"},
                "scores": {"type": "object", "additionalProperties": {"type": "integer"}},
            },
        },
    },
    "paths": {
        "/v2/account": {
            "get": {
                "summary": "Fetch the current user's account.",
                "operationId": "Nakama_GetAccount",
                "responses": {"200": {"schema": {"$ref": "#/definitions/apiAccount"}}},
            },
            "put": {
                "summary": "Update fields in the current user's account.",
                "operationId": "Nakama_UpdateAccount",
                "responses": {"200": {"schema": {"type": "object"}}},
                "parameters": [
                    {"name": "body", "in": "body", "required": True,
                     "schema": {"$ref": "#/definitions/apiUser"}},
                ],
            },
        },
        "/v2/account/authenticate/email": {
            "post": {
                "summary": "Authenticate a user with an email+password\nagainst the server.",
                "operationId": "Nakama_AuthenticateEmail",
                "responses": {"200": {"schema": {"$ref": "#/definitions/apiSession"}}},
                "parameters": [
                    {"name": "account", "in": "body", "required": True,
                     "schema": {"$ref": "#/definitions/apiAccountEmail"}},
                    {"name": "create", "in": "query", "required": False, "type": "boolean"},
                    {"name": "username", "in": "query", "required": True, "type": "string"},
                ],
                "security": [{"BasicAuth": []}],
            },
        },
        "/v2/user": {
            "get": {
                "summary": "Fetch zero or more users by ID and/or username.",
                "operationId": "Nakama_GetUsers",
                "responses": {"200": {"schema": {"$ref": "#/definitions/apiUsers"}}},
                "parameters": [
                    {"name": "ids", "in": "query", "type": "array", "items": {"type": "string"},
                     "collectionFormat": "multi"},
                    {"name": "limit", "in": "query", "type": "integer", "format": "int32"},
                ],
            },
        },
        "/v2/group/{groupId}/user/{userId}": {
            "delete": {
                "summary": "Kick a user from a group.",
                "operationId": "Nakama_KickGroupUser",
                "responses": {"200": {"schema": {"type": "object"}}},
                "parameters": [
                    {"name": "groupId", "in": "path", "required": True, "type": "string"},
                    {"name": "userId", "in": "path", "required": True, "type": "string"},
                ],
                "security": [{"HttpKeyAuth": []}],
            },
        },
        "/v2/rpc/{id}": {
            "post": {
                "summary": "Execute a Lua function on the server.",
                "operationId": "Nakama_RpcFunc",
                "responses": {"200": {"schema": {"$ref": "#/definitions/apiRpc"}}},
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "type": "string"},
                    {"name": "body", "in": "body", "required": True, "schema": {"type": "string"}},
                ],
            },
        },
    },
}

# apiRpc is referenced above but deliberately not defined.
RPC_PATH = "/v2/rpc/{id}"

MINIMAL_DOCUMENT: dict[str, Any] = {
    "definitions": {
        "counter": {
            "type": "object",
            "properties": {"count": {"type": "integer"}},
        },
    },
    "paths": {
        "/v1/counter": {
            "get": {
                "operationId": "Counters_GetCounter",
                "summary": "Read the counter.",
                "responses": {"200": {"schema": {"$ref": "#/definitions/counter"}}},
            },
        },
    },
}


@pytest.fixture
def api_document() -> dict[str, Any]:
    return copy.deepcopy(API_DOCUMENT)


@pytest.fixture
def api_schema(api_document) -> Schema:
    return parse_schema(api_document)


@pytest.fixture
def minimal_schema() -> Schema:
    return parse_schema(copy.deepcopy(MINIMAL_DOCUMENT))


@pytest.fixture
def write_schema(tmp_path):
    """Write a document to a temporary JSON file and return its path."""
    def _write(document: Any, name: str = "api.swagger.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path
    return _write
