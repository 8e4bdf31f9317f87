from __future__ import annotations

from typing import Any, Dict

import pytest


@pytest.fixture
def foo_entity() -> Dict[str, Any]:
    """Minimal class with one superclass and one instance method."""
    return {
        "header": "Foo",
        "infoItems": [{"type": "inherits", "value": "NSObject"}],
        "tasks": [],
        "memberGroups": [{"type": "instance", "members": ["bar"]}],
    }


@pytest.fixture
def full_entity() -> Dict[str, Any]:
    """Class exercising every object section."""
    return {
        "header": {"name": "GBParser", "kind": "class", "file": "GBParser.h", "brief": "Parses headers."},
        "info_items": [
            {"type": "inherits", "value": "NSObject"},
            {"type": "conforms", "value": "NSCopying"},
            {"type": "conforms", "value": "NSCoding"},
            {"type": "declared", "value": "GBParser.h"},
        ],
        "overview": "Parses source files.\n\nResults are cached per file.",
        "tasks": [
            {"header": "Creating parsers", "members": ["parserWithSettings:"]},
            {
                "header": "Parsing",
                "members": [
                    {"name": "parseFile:error:", "brief": "Parses one file."},
                    {"name": "isParsing"},
                ],
            },
        ],
        "member_groups": [
            {
                "type": "class",
                "members": [
                    {
                        "name": "parserWithSettings:",
                        "brief": "Returns a new parser.",
                        "prototype": [
                            {"type": "value", "value": "+ (id)parserWithSettings:"},
                            {"type": "parameter", "value": "settings"},
                        ],
                        "parameters": [{"name": "settings", "description": "Settings to use."}],
                        "returns": "The new parser.",
                    }
                ],
            },
            {
                "type": "instance",
                "members": [
                    {
                        "name": "parseFile:error:",
                        "brief": "Parses one file.",
                        "prototype": [
                            "- (BOOL)parseFile:",
                            {"type": "parameter", "value": "path"},
                            "error:",
                            {"type": "parameter", "value": "error"},
                        ],
                        "parameters": [
                            {"name": "path", "description": "File to parse."},
                            {"name": "error", "description": "Error on failure."},
                        ],
                        "exceptions": [{"name": "NSInvalidArgumentException", "description": "Thrown for nil path."}],
                        "description": "Reads the file & stores <results>.",
                    }
                ],
            },
            {"type": "property", "members": [{"name": "isParsing", "brief": "Whether parsing is active."}]},
        ],
    }


@pytest.fixture
def index_data() -> Dict[str, Any]:
    return {
        "header": "Project Reference",
        "groups": [
            {"type": "classes", "items": ["GBParser", {"name": "GBStore", "brief": "Stores objects."}]},
            {"type": "categories", "items": []},
            {"type": "protocols", "items": [{"name": "GBObjectDataProviding", "kind": "protocol"}]},
        ],
    }
