"""Typed snapshot of a remote GraphQL schema decoded from introspection JSON."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .errors import DecodeError

# __TypeKind values that carry a name
NAMED_KINDS = {"SCALAR", "OBJECT", "INTERFACE", "UNION", "ENUM", "INPUT_OBJECT"}


class RefKind(str, Enum):
    """Shape of a type reference."""

    NAMED = "NAMED"
    LIST = "LIST"
    NON_NULL = "NON_NULL"


@dataclass(frozen=True)
class TypeRef:
    """
    A GraphQL type expression such as ``[Foo!]!``.

    Named references carry ``name`` (and the introspection kind of the named
    type in ``named_kind``); wrapper references carry ``of_type`` only.
    """

    kind: RefKind
    name: Optional[str] = None
    of_type: Optional["TypeRef"] = None
    named_kind: Optional[str] = None

    def __post_init__(self):
        if self.kind is RefKind.NAMED:
            if not self.name or self.of_type is not None:
                raise ValueError("named type reference needs a name and no inner type")
        elif self.of_type is None or self.name is not None:
            raise ValueError(f"{self.kind.value} type reference needs an inner type and no name")

    @classmethod
    def named(cls, name: str, named_kind: Optional[str] = None) -> "TypeRef":
        return cls(RefKind.NAMED, name=name, named_kind=named_kind)

    @classmethod
    def list_of(cls, inner: "TypeRef") -> "TypeRef":
        return cls(RefKind.LIST, of_type=inner)

    @classmethod
    def non_null(cls, inner: "TypeRef") -> "TypeRef":
        return cls(RefKind.NON_NULL, of_type=inner)

    def __str__(self) -> str:
        if self.kind is RefKind.LIST:
            return f"[{self.of_type}]"
        if self.kind is RefKind.NON_NULL:
            return f"{self.of_type}!"
        return self.name

    @property
    def named_type(self) -> str:
        """Innermost type name with all list/non-null wrappers removed."""
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        return ref.name

    @classmethod
    def from_json(cls, data: Any) -> "TypeRef":
        """
        Decode an introspection ``TypeRef`` object.

        Raises:
            DecodeError: On a missing, malformed or unknown kind tag
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Expected type reference object, got {data!r}")

        kind = data.get("kind")
        try:
            if kind in ("LIST", "NON_NULL"):
                if data.get("ofType") is None:
                    raise DecodeError(f"{kind} type reference is missing ofType")
                return cls(RefKind(kind), of_type=cls.from_json(data["ofType"]))
            if kind in NAMED_KINDS:
                return cls.named(data.get("name"), named_kind=kind)
        except ValueError as e:
            raise DecodeError(f"Invalid type reference {data!r}: {e}") from e

        raise DecodeError(f"Unknown type kind {kind!r}")

    def to_json(self) -> dict:
        if self.kind is RefKind.NAMED:
            return {"kind": self.named_kind or "SCALAR", "name": self.name, "ofType": None}
        return {"kind": self.kind.value, "name": None, "ofType": self.of_type.to_json()}


@dataclass(frozen=True)
class InputValue:
    """Argument or input-object field."""

    name: str
    type: TypeRef
    default_value: Optional[str] = None

    @property
    def is_required(self) -> bool:
        # A default value does not make a non-null argument optional here.
        return self.type.kind is RefKind.NON_NULL

    @classmethod
    def from_json(cls, data: dict) -> "InputValue":
        return cls(
            name=_require(data, "name"),
            type=TypeRef.from_json(data.get("type")),
            default_value=data.get("defaultValue"),
        )

    def to_json(self) -> dict:
        return {"name": self.name, "type": self.type.to_json(), "defaultValue": self.default_value}


@dataclass(frozen=True)
class FieldDef:
    """Object field; only (name, canonical type) matter for comparisons."""

    name: str
    type: TypeRef
    args: tuple[InputValue, ...] = ()
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> "FieldDef":
        return cls(
            name=_require(data, "name"),
            type=TypeRef.from_json(data.get("type")),
            args=tuple(InputValue.from_json(a) for a in data.get("args") or []),
            is_deprecated=bool(data.get("isDeprecated", False)),
            deprecation_reason=data.get("deprecationReason"),
        )

    @classmethod
    def from_input_value(cls, value: InputValue) -> "FieldDef":
        return cls(name=value.name, type=value.type)

    def arg_by_name(self, name: str) -> Optional[InputValue]:
        for arg in self.args:
            if arg.name == name:
                return arg
        return None

    def to_json(self) -> dict:
        return {
            "name": self.name,
            "args": [a.to_json() for a in self.args],
            "type": self.type.to_json(),
            "isDeprecated": self.is_deprecated,
            "deprecationReason": self.deprecation_reason,
        }


@dataclass(frozen=True)
class TypeDef:
    """Full type definition from the introspection ``types`` list."""

    kind: str
    name: str
    fields: tuple[FieldDef, ...] = ()
    input_fields: tuple[InputValue, ...] = ()
    interfaces: tuple[TypeRef, ...] = ()
    enum_values: Optional[list] = None
    possible_types: tuple[TypeRef, ...] = ()

    @classmethod
    def from_json(cls, data: dict) -> "TypeDef":
        if not isinstance(data, dict):
            raise DecodeError(f"Expected type definition object, got {data!r}")
        kind = data.get("kind")
        if kind not in NAMED_KINDS:
            raise DecodeError(f"Unknown type kind {kind!r} for type {data.get('name')!r}")
        return cls(
            kind=kind,
            name=_require(data, "name"),
            fields=tuple(FieldDef.from_json(f) for f in data.get("fields") or []),
            input_fields=tuple(InputValue.from_json(f) for f in data.get("inputFields") or []),
            interfaces=tuple(TypeRef.from_json(i) for i in data.get("interfaces") or []),
            enum_values=data.get("enumValues"),
            possible_types=tuple(TypeRef.from_json(p) for p in data.get("possibleTypes") or []),
        )

    def to_json(self) -> dict:
        def refs(values, kinds):
            # null only where GraphQL has nothing for this kind
            if values or self.kind in kinds:
                return [v.to_json() for v in values]
            return None

        return {
            "kind": self.kind,
            "name": self.name,
            "fields": refs(self.fields, ("OBJECT", "INTERFACE")),
            "inputFields": refs(self.input_fields, ("INPUT_OBJECT",)),
            "interfaces": refs(self.interfaces, ("OBJECT", "INTERFACE")),
            "enumValues": self.enum_values,
            "possibleTypes": refs(self.possible_types, ("INTERFACE", "UNION")),
        }


@dataclass(frozen=True)
class DirectiveDef:
    """Directive definition; kept only so snapshots round-trip."""

    name: str
    locations: tuple[str, ...] = ()
    args: tuple[InputValue, ...] = ()

    @classmethod
    def from_json(cls, data: dict) -> "DirectiveDef":
        return cls(
            name=_require(data, "name"),
            locations=tuple(data.get("locations") or []),
            args=tuple(InputValue.from_json(a) for a in data.get("args") or []),
        )

    def to_json(self) -> dict:
        return {
            "name": self.name,
            "locations": list(self.locations),
            "args": [a.to_json() for a in self.args],
        }


@dataclass
class RemoteSchema:
    """Decoded ``__schema`` of a remote endpoint."""

    query_type: Optional[str]
    mutation_type: Optional[str] = None
    subscription_type: Optional[str] = None
    types: list[TypeDef] = field(default_factory=list)
    directives: list[DirectiveDef] = field(default_factory=list)

    def type_by_name(self, name: str) -> Optional[TypeDef]:
        """Get the type definition with exactly this name."""
        for typ in self.types:
            if typ.name == name:
                return typ
        return None

    def root_type_name(self, operation: str) -> Optional[str]:
        """Root type name for an operation kind (query/mutation/subscription)."""
        return {
            "query": self.query_type,
            "mutation": self.mutation_type,
            "subscription": self.subscription_type,
        }.get(operation)

    @classmethod
    def from_json(cls, payload: Any) -> "RemoteSchema":
        """
        Decode an introspection result.

        Args:
            payload: Either {"__schema": {...}} or {"data": {"__schema": {...}}}

        Returns:
            RemoteSchema snapshot

        Raises:
            DecodeError: If the payload does not look like an introspection result
        """
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            payload = payload["data"]
        if not isinstance(payload, dict) or not isinstance(payload.get("__schema"), dict):
            raise DecodeError("Introspection result has no __schema object")

        data = payload["__schema"]
        return cls(
            query_type=_root_name(data, "queryType"),
            mutation_type=_root_name(data, "mutationType"),
            subscription_type=_root_name(data, "subscriptionType"),
            types=[TypeDef.from_json(t) for t in data.get("types") or []],
            directives=[DirectiveDef.from_json(d) for d in data.get("directives") or []],
        )

    def to_json(self) -> dict:
        def root(name):
            return {"name": name} if name else None

        return {
            "__schema": {
                "queryType": root(self.query_type),
                "mutationType": root(self.mutation_type),
                "subscriptionType": root(self.subscription_type),
                "types": [t.to_json() for t in self.types],
                "directives": [d.to_json() for d in self.directives],
            }
        }


def _root_name(data: dict, key: str) -> Optional[str]:
    root = data.get(key)
    if root is None:
        return None
    if not isinstance(root, dict):
        raise DecodeError(f"Invalid {key}: {root!r}")
    return root.get("name")


def _require(data: Any, key: str) -> Any:
    if not isinstance(data, dict) or data.get(key) is None:
        raise DecodeError(f"Missing {key!r} in {data!r}")
    return data[key]
