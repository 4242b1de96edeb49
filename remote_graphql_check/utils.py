"""Utility functions for remote GraphQL compatibility checks."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from graphql import (
    FieldNode,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    OperationDefinitionNode,
    VariableNode,
    print_ast,
)

from .errors import DecodeError

# Leaf types that never get expanded
BUILTIN_SCALARS = frozenset({"Int", "Float", "String", "Boolean", "ID"})


# File system utilities
def ensure_dir(path: str) -> None:
    """Ensure directory exists, creating it if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def exists(path: str) -> bool:
    """Check if file exists."""
    return Path(path).exists()


def dirname(path: str) -> str:
    """Get directory name from path."""
    return str(Path(path).parent)


def expand_path(path: str) -> str:
    """Expand ~ in path."""
    return str(Path(path).expanduser())


# File I/O
def read_text(path: str) -> str:
    """Read text file."""
    return Path(path).read_text()


def read_json(path: str) -> dict:
    """Read JSON file."""
    with open(path) as f:
        return json.load(f)


def write_json(path: str, data: Any) -> None:
    """Write JSON file with pretty formatting."""
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def to_json(data: Any) -> str:
    """Convert data to JSON string."""
    return json.dumps(data, indent=2)


def now_iso() -> str:
    """Get current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat()


# Local schema helpers
def local_scalar_names(schema: GraphQLSchema) -> set[str]:
    """Names of every scalar the local schema knows, builtins included."""
    names = set(BUILTIN_SCALARS)
    names.update(name for name, typ in schema.type_map.items() if isinstance(typ, GraphQLScalarType))
    return names


def local_fields(graphql_type: GraphQLNamedType) -> Optional[dict]:
    """Field map of an object, interface or input type; None for leaf types."""
    if isinstance(graphql_type, (GraphQLObjectType, GraphQLInterfaceType, GraphQLInputObjectType)):
        return graphql_type.fields
    return None


def is_root_type(schema: GraphQLSchema, graphql_type: GraphQLNamedType) -> bool:
    """Check if type is the schema's Query or Mutation type."""
    roots = {t.name for t in (schema.query_type, schema.mutation_type) if t is not None}
    roots.update({"Query", "Mutation"})
    return graphql_type.name in roots


# AST helpers
def top_level_field(operation: OperationDefinitionNode) -> Optional[FieldNode]:
    """First top-level selection of an operation, if it is a field."""
    selections = operation.selection_set.selections if operation.selection_set else []
    if selections and isinstance(selections[0], FieldNode):
        return selections[0]
    return None


def variable_name(value) -> Optional[str]:
    """Name of a ``$variable`` value node without the ``$``, else None."""
    if isinstance(value, VariableNode):
        return value.name.value
    return None


def value_string(value) -> str:
    """Render an argument value node as GraphQL source."""
    return print_ast(value)


# HTTP response helpers
def safe_json_response(response, context: str = "GraphQL introspection") -> dict:
    """
    Safely parse JSON from HTTP response with helpful error messages.

    Args:
        response: requests.Response object
        context: Description of what operation failed

    Returns:
        Parsed JSON

    Raises:
        DecodeError: If response is not valid JSON, with diagnostic info
    """
    try:
        return response.json()
    except ValueError as e:
        content_type = response.headers.get("Content-Type", "unknown")

        body_preview = response.text[:300]
        if len(response.text) > 300:
            body_preview += "..."

        error_parts = [
            f"{context} failed - server returned non-JSON response",
            "",
            f"  URL: {response.url}",
            f"  Status: {response.status_code}",
            f"  Content-Type: {content_type}",
            "",
            "  Response preview:",
            f"  {body_preview}",
            "",
            "  Suggestions:",
            "  - Verify the URL points to a GraphQL endpoint",
            "  - Authentication may be required - try adding --token YOUR_TOKEN",
            "",
            f"  Original JSON error: {e}",
        ]
        raise DecodeError("\n".join(error_parts)) from e
