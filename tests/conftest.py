"""Shared fixtures for the linter test suite."""

import copy

import pytest

from openapi_linter.models.document import Document

MINIMAL_SPEC = {
    "openapi": "3.0.3",
    "info": {"title": "Pet Store", "version": "1.0.0"},
    "paths": {},
}


def make_document(data, **kwargs):
    """Build a document from plain data."""
    return Document.from_data(copy.deepcopy(data), **kwargs)


def spec_with_schemas(schemas, paths=None):
    spec = copy.deepcopy(MINIMAL_SPEC)
    spec["components"] = {"schemas": schemas}
    if paths is not None:
        spec["paths"] = paths
    return spec


@pytest.fixture
def minimal_spec():
    """Minimal valid OpenAPI document"""
    return copy.deepcopy(MINIMAL_SPEC)


@pytest.fixture
def pet_store_spec():
    """Small but complete spec using every construct the linter inspects"""
    return {
        "openapi": "3.1.0",
        "info": {"title": "Pet Store", "version": "1.0.0"},
        "paths": {
            "/pets/{id}": {
                "get": {
                    "responses": {
                        "200": {
                            "description": "A pet",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Pet"}
                                }
                            },
                        }
                    }
                }
            }
        },
        "components": {
            "schemas": {
                "Pet": {
                    "oneOf": [
                        {"$ref": "#/components/schemas/Cat"},
                        {"$ref": "#/components/schemas/Dog"},
                    ],
                    "discriminator": {"propertyName": "kind"},
                },
                "Cat": {
                    "type": "object",
                    "required": ["kind", "name"],
                    "properties": {
                        "kind": {"type": "string"},
                        "name": {"type": "string"},
                    },
                },
                "Dog": {
                    "type": "object",
                    "required": ["kind"],
                    "properties": {
                        "kind": {"type": "string"},
                        "owner": {
                            "type": "object",
                            "required": ["id"],
                            "properties": {"id": {"type": "integer"}},
                        },
                    },
                },
            }
        },
    }
