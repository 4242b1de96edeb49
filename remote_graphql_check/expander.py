"""Flattening of nested remote object and input types."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .errors import RemoteTypeNotFound
from .remote_schema import FieldDef, RemoteSchema, TypeRef
from .utils import BUILTIN_SCALARS

logger = logging.getLogger(__name__)


@dataclass
class ExpansionState:
    """Per-call bookkeeping for ``expand``."""

    visited: set[str] = field(default_factory=set)
    types_to_fields: dict[str, list[FieldDef]] = field(default_factory=dict)


def expand(
    seeds: Mapping[str, TypeRef],
    schema: RemoteSchema,
    scalars: Iterable[str] = BUILTIN_SCALARS,
) -> dict[str, list[FieldDef]]:
    """
    Expand nested types into a flat map.

    A ``Country`` with a ``states: [State]`` field expands to both ``Country``
    and ``State``, however deep the nesting goes. Scalars are not expanded.
    Object fields and input fields of one type share a single entry.

    Args:
        seeds: Placeholder name -> type reference to start from
        schema: Remote schema snapshot
        scalars: Type names treated as leaves

    Returns:
        Type name -> fields, in depth-first discovery order

    Raises:
        RemoteTypeNotFound: If a reachable type is missing from the snapshot
    """
    scalars = frozenset(scalars)
    state = ExpansionState()
    for seed in seeds.values():
        name = seed.named_type
        if name in scalars:
            continue
        _expand_type(name, schema, state, scalars)
    return state.types_to_fields


def _expand_type(name: str, schema: RemoteSchema, state: ExpansionState, scalars: frozenset) -> None:
    if name in state.visited:
        return
    # Mark first so self-referencing types terminate
    state.visited.add(name)

    typ = schema.type_by_name(name)
    if typ is None:
        raise RemoteTypeNotFound(name)

    logger.debug("Expanding remote type %s", name)
    state.types_to_fields[name] = list(typ.fields)
    for fld in typ.fields:
        if fld.type.named_type not in scalars:
            _expand_type(fld.type.named_type, schema, state, scalars)

    state.types_to_fields[name].extend(FieldDef.from_input_value(v) for v in typ.input_fields)
    for value in typ.input_fields:
        if value.type.named_type not in scalars:
            _expand_type(value.type.named_type, schema, state, scalars)
