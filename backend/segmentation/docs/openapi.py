"""Builds a minimal OpenAPI spec from existing Pydantic schemas."""
from __future__ import annotations

from typing import Any, Dict

from flask import request

from ..api.history.schemas import HistoryRecordOut
from ..api.segments.schemas import SegmentCreateIn, SegmentCreatedOut, SegmentOut, SegmentUpdateIn
from ..api.users.schemas import (
    ChangeUserSegmentsIn,
    ChangeUserSegmentsOut,
    SegmentWithDeadline,
    UserActiveSegmentsOut,
    UserCreateIn,
    UserCreatedOut,
    UserOut,
)

_MODELS = (
    SegmentCreateIn,
    SegmentUpdateIn,
    SegmentCreatedOut,
    SegmentOut,
    UserCreateIn,
    UserCreatedOut,
    UserOut,
    SegmentWithDeadline,
    ChangeUserSegmentsIn,
    ChangeUserSegmentsOut,
    UserActiveSegmentsOut,
    HistoryRecordOut,
)

_REF = "#/components/schemas/{model}"


def _schemas() -> Dict[str, Any]:
    schemas: Dict[str, Any] = {}
    for model in _MODELS:
        schema = model.model_json_schema(ref_template=_REF)
        schemas.update(schema.pop("$defs", {}))
        schemas[model.__name__] = schema
    schemas["Error"] = {
        "type": "object",
        "properties": {"error": {"type": "string"}, "message": {"type": "string"}},
    }
    return schemas


def _body(model: str) -> Dict[str, Any]:
    return {"required": True, "content": {"application/json": {"schema": {"$ref": _REF.format(model=model)}}}}


def _data(model: str, *, array: bool = False) -> Dict[str, Any]:
    item = {"$ref": _REF.format(model=model)}
    schema = {"type": "array", "items": item} if array else item
    return {"application/json": {"schema": {"type": "object", "properties": {"data": schema}}}}


_ERROR = {"application/json": {"schema": {"$ref": _REF.format(model="Error")}}}
_SLUG = [{"name": "slug", "in": "path", "required": True, "schema": {"type": "string"}}]
_USER_ID = [{"name": "user_id", "in": "path", "required": True, "schema": {"type": "integer"}}]


def build_openapi() -> Dict[str, Any]:
    base_url = f"{request.scheme}://{request.host}"
    return {
        "openapi": "3.0.3",
        "info": {"title": "User Segmentation API", "version": "1.0.0"},
        "servers": [{"url": base_url}],
        "tags": [
            {"name": "Health"},
            {"name": "Segments"},
            {"name": "Users"},
            {"name": "History"},
        ],
        "paths": {
            "/api/health/": {
                "get": {"tags": ["Health"], "summary": "Liveness probe", "responses": {"200": {"description": "OK"}}}
            },
            "/api/health/db": {
                "get": {"tags": ["Health"], "summary": "Database connectivity", "responses": {"200": {"description": "OK"}, "503": {"description": "Unavailable"}}}
            },
            "/api/segments/": {
                "get": {
                    "tags": ["Segments"], "summary": "List segments",
                    "responses": {"200": {"description": "OK", "content": _data("SegmentOut", array=True)}},
                },
                "post": {
                    "tags": ["Segments"], "summary": "Create segment",
                    "requestBody": _body("SegmentCreateIn"),
                    "responses": {
                        "201": {"description": "Created", "content": _data("SegmentCreatedOut")},
                        "400": {"description": "Invalid input", "content": _ERROR},
                        "409": {"description": "Slug already exists", "content": _ERROR},
                    },
                },
            },
            "/api/segments/{slug}": {
                "parameters": _SLUG,
                "get": {
                    "tags": ["Segments"], "summary": "Get segment by slug",
                    "responses": {"200": {"description": "OK", "content": _data("SegmentOut")}, "404": {"description": "Not found", "content": _ERROR}},
                },
                "put": {
                    "tags": ["Segments"], "summary": "Update segment description",
                    "requestBody": _body("SegmentUpdateIn"),
                    "responses": {"200": {"description": "OK", "content": _data("SegmentOut")}, "404": {"description": "Not found", "content": _ERROR}},
                },
                "delete": {
                    "tags": ["Segments"], "summary": "Delete segment and its memberships",
                    "responses": {"200": {"description": "Deleted", "content": _data("SegmentOut")}, "404": {"description": "Not found", "content": _ERROR}},
                },
            },
            "/api/users/": {
                "get": {
                    "tags": ["Users"], "summary": "List users",
                    "responses": {"200": {"description": "OK", "content": _data("UserOut", array=True)}},
                },
                "post": {
                    "tags": ["Users"], "summary": "Create user",
                    "requestBody": _body("UserCreateIn"),
                    "responses": {"201": {"description": "Created", "content": _data("UserCreatedOut")}},
                },
            },
            "/api/users/{user_id}": {
                "parameters": _USER_ID,
                "get": {
                    "tags": ["Users"], "summary": "Get user by id",
                    "responses": {"200": {"description": "OK", "content": _data("UserOut")}, "404": {"description": "Not found", "content": _ERROR}},
                },
            },
            "/api/users/{user_id}/segments": {
                "parameters": _USER_ID,
                "post": {
                    "tags": ["Users"],
                    "summary": "Add and remove segments of a user (additions first, fails fast, no rollback)",
                    "requestBody": _body("ChangeUserSegmentsIn"),
                    "responses": {
                        "200": {"description": "Changed", "content": _data("ChangeUserSegmentsOut")},
                        "404": {"description": "User or segment not found", "content": _ERROR},
                    },
                },
            },
            "/api/users/{user_id}/active": {
                "parameters": _USER_ID,
                "get": {
                    "tags": ["Users"], "summary": "Active segments of a user",
                    "responses": {"200": {"description": "OK", "content": _data("UserActiveSegmentsOut")}, "404": {"description": "Not found", "content": _ERROR}},
                },
            },
            "/api/history/": {
                "get": {
                    "tags": ["History"], "summary": "Membership changes within a calendar month",
                    "parameters": [
                        {"name": "year", "in": "query", "required": True, "schema": {"type": "integer"}},
                        {"name": "month", "in": "query", "required": True, "schema": {"type": "integer", "minimum": 1, "maximum": 12}},
                        {"name": "user_id", "in": "query", "required": False, "schema": {"type": "integer"}},
                    ],
                    "responses": {"200": {"description": "OK", "content": _data("HistoryRecordOut", array=True)}, "400": {"description": "Invalid input", "content": _ERROR}},
                },
            },
        },
        "components": {"schemas": _schemas()},
    }
