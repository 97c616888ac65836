"""YAML loader + schema validation for problem files.

Provides a single entrypoint to parse a YAML string, run early shape checks
that give clearer messages than the schema would, validate against the
packaged JSON schema, and return a canonical dictionary for
``fdenum.dsl.parse.build_problem``.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any, Dict

import jsonschema
import yaml

__all__ = ["load_problem_yaml", "load_schema"]


def load_schema() -> Dict[str, Any]:
    """Return the packaged problem JSON schema."""
    with (
        resources.files("fdenum.schemas")
        .joinpath("problem.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_problem_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load and validate a problem YAML string.

    Args:
        yaml_str: YAML document text.

    Returns:
        Validated dictionary. ``variables`` keeps document order, which is the
        declaration order.

    Raises:
        ValueError: If the document is not a mapping, lacks a ``variables``
            mapping, or uses keys YAML turns into non-strings (for example an
            unquoted ``on`` or ``yes``).
        jsonschema.ValidationError: If the document violates the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    variables = data.get("variables")
    if variables is None:
        raise ValueError("Problem must define a 'variables' mapping")
    if not isinstance(variables, dict):
        raise ValueError("'variables' must be a mapping of name to constraint")
    for name in variables:
        if not isinstance(name, str):
            raise ValueError(
                f"Variable name {name!r} is not a string; quote it in YAML "
                f"(YAML reads words like on/off/yes/no as booleans)"
            )

    jsonschema.validate(data, load_schema())
    return data
