from collections.abc import Callable

import pytest
from graphql import GraphQLSchema, build_schema, introspection_from_schema

from remote_graphql_check.checker import ValidationContext
from remote_graphql_check.parser import build_context
from remote_graphql_check.remote_schema import RemoteSchema

REMOTE_URL = "https://remote.example.com/graphql"

POST_SDL = """
type Author { id: ID! name: String }
type Post { id: ID! title: String author: Author }
type Query { getPost(id: ID!): Post }
"""

GET_POST = "query($id: ID!) { getPost(id: $id) { id title } }"


@pytest.fixture
def remote() -> Callable[[str], RemoteSchema]:
    """Build a remote snapshot from SDL the way a server would introspect it."""

    def make(sdl: str) -> RemoteSchema:
        return RemoteSchema.from_json({"data": introspection_from_schema(build_schema(sdl))})

    return make


@pytest.fixture
def context() -> Callable[..., ValidationContext]:
    def make(
        local_sdl: str = POST_SDL,
        operation: str = GET_POST,
        type_name: str = "Query",
        field_name: str = "getPost",
    ) -> ValidationContext:
        local: GraphQLSchema = build_schema(local_sdl)
        return build_context(local, type_name, field_name, operation, REMOTE_URL)

    return make
