"""Shared pytest fixtures for tfcodegen tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from tfcodegen.codegen.core.schema import Specification, parse_specification


@pytest.fixture
def spec_document() -> Dict[str, Any]:
    """Return a small specification covering attributes, blocks and data sources."""
    return {
        "provider": {"name": "example"},
        "resources": [
            {
                "name": "thing",
                "schema": {
                    "attributes": [
                        {"name": "id", "string": {"computed_optional_required": "computed"}},
                        {
                            "name": "enabled",
                            "bool": {
                                "computed_optional_required": "computed_optional",
                                "default": {"static": True},
                            },
                        },
                        {
                            "name": "tags",
                            "list": {
                                "computed_optional_required": "optional",
                                "element_type": {"string": {}},
                            },
                        },
                        {
                            "name": "config",
                            "single_nested": {
                                "computed_optional_required": "optional",
                                "attributes": [
                                    {
                                        "name": "port",
                                        "int64": {"computed_optional_required": "required"},
                                    }
                                ],
                            },
                        },
                    ],
                    "blocks": [
                        {
                            "name": "rule",
                            "list_nested": {
                                "nested_object": {
                                    "attributes": [
                                        {
                                            "name": "action",
                                            "string": {"computed_optional_required": "required"},
                                        }
                                    ]
                                }
                            },
                        }
                    ],
                },
            }
        ],
        "datasources": [
            {
                "name": "thing",
                "schema": {
                    "attributes": [
                        {"name": "id", "string": {"computed_optional_required": "required"}},
                    ]
                },
            }
        ],
    }


@pytest.fixture
def specification(spec_document: Dict[str, Any]) -> Specification:
    """Return the parsed form of spec_document."""
    return parse_specification(spec_document)


@pytest.fixture
def spec_file(tmp_path: Path, spec_document: Dict[str, Any]) -> Path:
    """Write spec_document to a temporary JSON file."""
    path = tmp_path / "spec.json"
    path.write_text(json.dumps(spec_document), encoding="utf-8")
    return path
