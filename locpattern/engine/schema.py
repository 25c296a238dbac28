"""JSON schema validation of expanded location trees."""

import json
from pathlib import Path

import jsonschema

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "location_tree.schema.json"


def load_tree_schema() -> dict:
    """Load the location tree JSON schema."""
    with open(SCHEMA_PATH) as f:
        return json.load(f)


def validate_tree(tree: list) -> None:
    """Validate a dict tree against the schema. Raises jsonschema.ValidationError."""
    jsonschema.validate(tree, load_tree_schema())
