"""GraphQL parsing of the local schema and the delegated operation."""

from graphql import (
    GraphQLObjectType,
    GraphQLSchema,
    OperationDefinitionNode,
    build_schema,
    parse,
)

from .checker import ValidationContext
from .errors import InvalidOperation


def build_local_schema(source: str) -> GraphQLSchema:
    """
    Build the local schema from SDL.

    Args:
        source: GraphQL schema definition language

    Returns:
        GraphQLSchema object

    Raises:
        GraphQLError: If the SDL is invalid
    """
    return build_schema(source)


def parse_operation(source: str) -> OperationDefinitionNode:
    """
    Parse the delegated operation.

    Args:
        source: GraphQL document holding exactly one operation

    Returns:
        OperationDefinitionNode AST

    Raises:
        GraphQLError: If the document is syntactically invalid
        InvalidOperation: If it does not hold exactly one operation
    """
    doc = parse(source)
    operations = [d for d in doc.definitions if isinstance(d, OperationDefinitionNode)]
    if len(operations) != 1:
        raise InvalidOperation(f"expected exactly one operation, found {len(operations)}.")
    return operations[0]


def build_context(
    schema: GraphQLSchema, type_name: str, field_name: str, operation: str, url: str
) -> ValidationContext:
    """
    Assemble a ValidationContext for the field ``type_name.field_name``.

    Raises:
        InvalidOperation: If the local type or field does not exist
    """
    parent_type = schema.get_type(type_name)
    if not isinstance(parent_type, GraphQLObjectType):
        raise InvalidOperation(f"type {type_name} is not an object type of the local schema.")
    if field_name not in parent_type.fields:
        raise InvalidOperation(f"field {field_name} is not present in local type {type_name}.")

    return ValidationContext(
        parent_type=parent_type,
        parent_field_name=field_name,
        operation=parse_operation(operation),
        url=url,
        schema=schema,
    )
