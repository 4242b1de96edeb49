"""Error types raised while checking a remote GraphQL operation."""

from typing import Optional


class RemoteGraphqlError(Exception):
    """Base class for all compatibility-check failures."""


# Transport
class TransportError(RemoteGraphqlError):
    """Remote endpoint could not be reached or answered badly."""


class IntrospectionTimeout(TransportError, TimeoutError):
    """Introspection request exceeded its timeout."""


class DecodeError(TransportError):
    """Introspection response is not valid JSON or has the wrong shape."""


# Operation
class InvalidOperation(RemoteGraphqlError):
    """Local operation cannot be checked."""


class UnsupportedOperationKind(InvalidOperation):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"found {kind} operation, it can only have query/mutation.")


class UnsupportedParentField(InvalidOperation):
    def __init__(self, parent_type: str, field_name: str):
        self.parent_type = parent_type
        self.field_name = field_name
        super().__init__(
            f"{parent_type}.{field_name}: remote graphql validation is only supported "
            f"for fields of the Query and Mutation types."
        )


# Remote lookups
class RemoteFieldNotFound(RemoteGraphqlError):
    def __init__(self, operation: str, field_name: str):
        self.operation = operation
        self.field_name = field_name
        super().__init__(f"given {operation}: {field_name} is not present in remote schema.")


class RemoteTypeNotFound(RemoteGraphqlError):
    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unable to find the type {type_name} on the remote schema")


class RemoteArgNotFound(RemoteGraphqlError):
    def __init__(self, operation: str, field_name: str, arg_name: str):
        self.operation = operation
        self.field_name = field_name
        self.arg_name = arg_name
        super().__init__(
            f"given {operation}: {field_name}: arg {arg_name} not present in remote {operation}."
        )


# Type mismatches
class TypeMismatch(RemoteGraphqlError):
    """Local and remote canonical type strings differ."""

    def __init__(self, message: str, expected: str, got: str):
        self.expected = expected
        self.got = got
        super().__init__(message)


class ReturnTypeMismatch(TypeMismatch):
    def __init__(self, operation: str, field_name: str, expected: str, got: str):
        self.operation = operation
        self.field_name = field_name
        super().__init__(
            f"given {operation}: {field_name}: return type mismatch; "
            f"expected: {expected}, got: {got}.",
            expected,
            got,
        )


class ArgTypeMismatch(TypeMismatch):
    def __init__(self, operation: str, field_name: str, arg_name: str, expected: str, got: str):
        self.operation = operation
        self.field_name = field_name
        self.arg_name = arg_name
        super().__init__(
            f"given {operation}: {field_name}: type mismatch for arg {arg_name}; "
            f"expected: {expected}, got: {got}.",
            expected,
            got,
        )


class FieldTypeMismatch(TypeMismatch):
    def __init__(self, type_name: str, field_name: str, expected: str, got: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(
            f"type mismatch for field {field_name} in type {type_name}; "
            f"expected: {expected}, got: {got}.",
            expected,
            got,
        )


# Arguments
class RequiredArgMissing(RemoteGraphqlError):
    def __init__(self, operation: str, field_name: str, arg_name: str):
        self.operation = operation
        self.field_name = field_name
        self.arg_name = arg_name
        super().__init__(f"given {operation}: {field_name}: required arg {arg_name} is missing.")


class MissingVariable(RemoteGraphqlError):
    def __init__(self, operation: str, field_name: str, variable: Optional[str]):
        self.operation = operation
        self.field_name = field_name
        self.variable = variable
        super().__init__(
            f"given {operation}: {field_name}: variable {variable} is missing in given context."
        )


# Local lookups
class LocalTypeNotFound(RemoteGraphqlError):
    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unable to find remote type {type_name} in the local schema")


class LocalFieldNotFound(RemoteGraphqlError):
    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(
            f"{field_name} field for the remote type {type_name} is not present "
            f"in the local type {type_name}"
        )
