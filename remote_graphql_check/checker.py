"""Compatibility check of a delegated operation against a remote schema."""

import logging
from dataclasses import dataclass
from typing import Optional

from graphql import (
    FieldNode,
    GraphQLArgument,
    GraphQLField,
    GraphQLObjectType,
    GraphQLSchema,
    OperationDefinitionNode,
)

from . import introspection, utils
from .errors import (
    ArgTypeMismatch,
    FieldTypeMismatch,
    InvalidOperation,
    LocalFieldNotFound,
    LocalTypeNotFound,
    MissingVariable,
    RemoteArgNotFound,
    RemoteFieldNotFound,
    RequiredArgMissing,
    ReturnTypeMismatch,
    UnsupportedOperationKind,
    UnsupportedParentField,
)
from .expander import expand
from .remote_schema import FieldDef, InputValue, RemoteSchema, TypeRef

logger = logging.getLogger(__name__)

SUPPORTED_OPERATIONS = ("query", "mutation")

# Seed key for the return type; not a valid GraphQL argument name
RETURN_TYPE_KEY = "\x00graphql-return"


@dataclass
class ValidationContext:
    """Everything one check needs; lives for a single call."""

    parent_type: GraphQLObjectType
    parent_field_name: str
    operation: OperationDefinitionNode
    url: str
    schema: GraphQLSchema

    @property
    def parent_field(self) -> GraphQLField:
        return self.parent_type.fields[self.parent_field_name]

    @property
    def operation_kind(self) -> str:
        return self.operation.operation.value


@dataclass
class LocalArg:
    """Argument as supplied by the local operation."""

    name: str
    value: str
    definition: Optional[GraphQLArgument]


def validate_remote_graphql(
    ctx: ValidationContext,
    remote_schema: Optional[RemoteSchema] = None,
    timeout: float = introspection.DEFAULT_TIMEOUT,
    token: Optional[str] = None,
) -> None:
    """
    Validate a delegated operation against the remote schema.

    Stages run in order and the first failure is raised: root resolution,
    field lookup, return type, arguments, nested shape.

    Args:
        ctx: Local side of the check
        remote_schema: Snapshot to check against; introspects ``ctx.url`` if None
        timeout: Introspection timeout in seconds
        token: Optional bearer token for introspection

    Raises:
        RemoteGraphqlError: Subclass describing the first incompatibility found
    """
    kind = ctx.operation_kind
    if kind not in SUPPORTED_OPERATIONS:
        raise UnsupportedOperationKind(kind)

    given = utils.top_level_field(ctx.operation)
    if given is None:
        raise InvalidOperation(f"given {kind} has no top-level field selection.")

    if remote_schema is None:
        remote_schema = introspection.fetch_schema(ctx.url, timeout=timeout, token=token)

    remote_field = find_remote_field(remote_schema, kind, given.name.value)
    logger.debug("Found remote %s %s: %s", kind, remote_field.name, remote_field.type)

    check_return_type(ctx, remote_field)
    check_arguments(ctx, given, remote_field)
    check_shape(ctx, remote_field, remote_schema)

    logger.debug("%s %s is compatible with %s", kind, remote_field.name, ctx.url)


def find_remote_field(remote_schema: RemoteSchema, kind: str, name: str) -> FieldDef:
    """
    Find a root field of the remote schema.

    Raises:
        RemoteFieldNotFound: If the root type or the field is absent
    """
    root_name = remote_schema.root_type_name(kind)
    root = remote_schema.type_by_name(root_name) if root_name else None
    if root is not None:
        for fld in root.fields:
            if fld.name == name:
                return fld
    raise RemoteFieldNotFound(kind, name)


def check_return_type(ctx: ValidationContext, remote_field: FieldDef) -> None:
    expected = str(ctx.parent_field.type)
    got = str(remote_field.type)
    if expected != got:
        raise ReturnTypeMismatch(ctx.operation_kind, remote_field.name, expected, got)


def local_args(ctx: ValidationContext, given: FieldNode) -> list[LocalArg]:
    """
    Resolve the arguments of the given selection against the parent field.

    Raises:
        UnsupportedParentField: If the parent type is not a root type
    """
    if not utils.is_root_type(ctx.schema, ctx.parent_type):
        # TODO: resolve arguments from the parent object for fields on non-root types
        raise UnsupportedParentField(ctx.parent_type.name, ctx.parent_field_name)

    parent_args = ctx.parent_field.args
    out = []
    for arg in given.arguments or []:
        var = utils.variable_name(arg.value)
        out.append(
            LocalArg(
                name=arg.name.value,
                value=utils.value_string(arg.value),
                definition=parent_args.get(var) if var else None,
            )
        )
    return out


def check_arguments(ctx: ValidationContext, given: FieldNode, remote_field: FieldDef) -> None:
    kind = ctx.operation_kind
    supplied = local_args(ctx, given)

    for arg in supplied:
        remote_arg = remote_field.arg_by_name(arg.name)
        if remote_arg is None:
            raise RemoteArgNotFound(kind, remote_field.name, arg.name)
        if arg.definition is None:
            raise MissingVariable(kind, remote_field.name, arg.value)
        expected = str(arg.definition.type)
        got = str(remote_arg.type)
        if expected != got:
            raise ArgTypeMismatch(kind, remote_field.name, arg.name, expected, got)

    supplied_names = {arg.name for arg in supplied}
    for remote_arg in remote_field.args:
        if remote_arg.is_required and remote_arg.name not in supplied_names:
            raise RequiredArgMissing(kind, remote_field.name, remote_arg.name)


def shape_seeds(remote_field: FieldDef, remote_schema: RemoteSchema) -> dict[str, TypeRef]:
    """Return type plus every object/input-object argument type."""
    seeds = {RETURN_TYPE_KEY: remote_field.type}
    for arg in remote_field.args:
        if _is_composite(arg, remote_schema):
            seeds[arg.name] = arg.type
    return seeds


def _is_composite(arg: InputValue, remote_schema: RemoteSchema) -> bool:
    typ = remote_schema.type_by_name(arg.type.named_type)
    # Unknown names are seeded so expansion reports them
    return typ is None or typ.kind in ("OBJECT", "INPUT_OBJECT")


def check_shape(ctx: ValidationContext, remote_field: FieldDef, remote_schema: RemoteSchema) -> None:
    """
    Check every nested remote type reachable from the operation against the local schema.

    Raises:
        LocalTypeNotFound, LocalFieldNotFound, FieldTypeMismatch
    """
    expanded = expand(
        shape_seeds(remote_field, remote_schema),
        remote_schema,
        scalars=utils.local_scalar_names(ctx.schema),
    )

    for type_name, fields in expanded.items():
        local_type = ctx.schema.get_type(type_name)
        if local_type is None:
            raise LocalTypeNotFound(type_name)
        local_fields = utils.local_fields(local_type) or {}
        for fld in fields:
            local_field = local_fields.get(fld.name)
            if local_field is None:
                raise LocalFieldNotFound(type_name, fld.name)
            expected = str(local_field.type)
            got = str(fld.type)
            if expected != got:
                raise FieldTypeMismatch(type_name, fld.name, expected, got)
