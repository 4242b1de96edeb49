"""Remote schema introspection."""

import logging
from typing import Optional

import requests

from . import utils
from .errors import DecodeError, IntrospectionTimeout, TransportError
from .remote_schema import RemoteSchema

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

INTROSPECTION_QUERY = """
    query {
      __schema {
        queryType { name }
        mutationType { name }
        subscriptionType { name }
        types {
          ...FullType
        }
        directives {
          name
          locations
          args {
            ...InputValue
          }
        }
      }
    }
    fragment FullType on __Type {
      kind
      name
      fields(includeDeprecated: true) {
        name
        args {
          ...InputValue
        }
        type {
          ...TypeRef
        }
        isDeprecated
        deprecationReason
      }
      inputFields {
        ...InputValue
      }
      interfaces {
        ...TypeRef
      }
      enumValues(includeDeprecated: true) {
        name
        isDeprecated
        deprecationReason
      }
      possibleTypes {
        ...TypeRef
      }
    }
    fragment InputValue on __InputValue {
      name
      type { ...TypeRef }
      defaultValue
    }
    fragment TypeRef on __Type {
      kind
      name
      ofType {
        kind
        name
        ofType {
          kind
          name
          ofType {
            kind
            name
            ofType {
              kind
              name
              ofType {
                kind
                name
                ofType {
                  kind
                  name
                  ofType {
                    kind
                    name
                  }
                }
              }
            }
          }
        }
      }
    }
"""


def introspect(url: str, timeout: float = DEFAULT_TIMEOUT, token: Optional[str] = None) -> dict:
    """
    Introspect a GraphQL schema via HTTP.

    Sends a single POST; there are no retries.

    Args:
        url: GraphQL endpoint URL
        timeout: Request timeout in seconds
        token: Optional bearer token for authentication

    Returns:
        Decoded response body

    Raises:
        IntrospectionTimeout: If the request times out
        TransportError: If the request fails or the server answers with an error status
        DecodeError: If the body is not JSON or carries no data
    """
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    logger.debug("Introspecting %s (timeout %ss)", url, timeout)
    try:
        resp = requests.post(
            url, json={"query": INTROSPECTION_QUERY}, headers=headers, timeout=timeout
        )
    except requests.Timeout as e:
        raise IntrospectionTimeout(f"Introspection of {url} timed out after {timeout}s") from e
    except requests.RequestException as e:
        raise TransportError(f"Introspection of {url} failed: {e}") from e

    if not resp.ok:
        raise TransportError(f"Introspection of {url} failed with status {resp.status_code}")

    payload = utils.safe_json_response(resp)

    if not isinstance(payload, dict):
        raise DecodeError(f"Introspection of {url} returned {type(payload).__name__}, expected object")
    if payload.get("errors") and not payload.get("data"):
        raise DecodeError(f"Introspection errors: {payload['errors']}")

    return payload


def fetch_schema(url: str, timeout: float = DEFAULT_TIMEOUT, token: Optional[str] = None) -> RemoteSchema:
    """Introspect ``url`` and decode the result into a RemoteSchema."""
    schema = RemoteSchema.from_json(introspect(url, timeout=timeout, token=token))
    logger.debug("Remote schema at %s has %d types", url, len(schema.types))
    return schema


def load_schema_file(path: str) -> RemoteSchema:
    """
    Load a previously saved introspection result.

    Args:
        path: JSON file holding {"__schema": ...} or {"data": {"__schema": ...}}

    Returns:
        RemoteSchema snapshot
    """
    try:
        payload = utils.read_json(path)
    except ValueError as e:
        raise DecodeError(f"{path} is not valid introspection JSON: {e}") from e
    return RemoteSchema.from_json(payload)


def save_schema_file(path: str, schema: RemoteSchema) -> None:
    """Write a snapshot as introspection JSON."""
    utils.ensure_dir(utils.dirname(path))
    utils.write_json(path, schema.to_json())
