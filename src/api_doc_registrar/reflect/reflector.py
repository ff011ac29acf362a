"""Type reflector — converts payload types into Schema trees.

Payloads are types, typing constructs, instances, or explicit Schema
objects. Instances are reflected on their type only; field values are never
read, so example data is not leaked into the generated document.

Record types are dataclasses and pydantic models. Field naming follows the
serialization annotations of each kind:

    @dataclass
    class Upstream:
        address: str = field(metadata={"json": "address", "description": "Upstream address"})
        fails: int = field(default=0, metadata={"json": "fails,omitempty"})
        secret: str = field(default="", metadata={"json": "-"})

Self-referential record types are expanded once; the nested occurrence
becomes a `$ref` into `components`, keyed by class name, or by module and
qualified name when two such types share a class name.
"""

import collections
import collections.abc
import dataclasses
import datetime
import decimal
import enum
import logging
import re
import types
import typing
import uuid

from pydantic import BaseModel

from api_doc_registrar.model.schema import Schema

logger = logging.getLogger(__name__)

SEQUENCE_TYPES = (
    list,
    tuple,
    set,
    frozenset,
    collections.deque,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)

MAPPING_TYPES = (
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)

# Checked in order with issubclass; bool must precede int.
PRIMITIVES = (
    (bool, "boolean", None),
    (str, "string", None),
    (bytes, "string", None),
    (datetime.datetime, "string", "date-time"),
    (datetime.date, "string", "date"),
    (uuid.UUID, "string", "uuid"),
    (int, "integer", None),
    (float, "number", None),
    (decimal.Decimal, "number", None),
)

# Parameter type names: schema types plus Python builtin names.
TYPE_NAMES = {
    "string": str,
    "str": str,
    "integer": int,
    "int": int,
    "number": float,
    "float": float,
    "boolean": bool,
    "bool": bool,
    "array": list,
    "list": list,
    "object": dict,
    "dict": dict,
}


# Characters allowed in component names are [A-Za-z0-9._-].
_COMPONENT_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


def _object() -> Schema:
    return Schema(type="object")


def _is_type_like(value) -> bool:
    if isinstance(value, type):
        return True
    if typing.get_origin(value) is not None:
        return True
    return isinstance(value, (typing.TypeVar, types.UnionType)) or value is typing.Any


class SchemaReflector:
    """Builds Schema trees from payload types.

    One reflector serves a single render: `components` collects the schemas
    of self-referential record types met along the way.
    """

    def __init__(self):
        self.components: dict[str, Schema] = {}
        self._expanding: list[type] = []
        self._recursive: set[type] = set()
        self._names: dict[type, str] = {}

    def reflect(self, payload) -> Schema:
        """Return the schema of a payload. Never raises for unknown types."""
        if isinstance(payload, Schema):
            return payload.model_copy(deep=True)
        if payload is None:
            return _object()
        tp = payload if _is_type_like(payload) else type(payload)
        return self._schema_for(tp)

    def reflect_type_name(self, name: str) -> Schema:
        """Schema for a primitive type name such as "integer" or "str"."""
        tp = TYPE_NAMES.get(name)
        if tp is None:
            return _object()
        schema = self._schema_for(tp)
        if tp is list:
            schema.items = None
        return schema

    def _schema_for(self, tp) -> Schema:
        if tp is None or tp is type(None):
            return _object()

        origin = typing.get_origin(tp)
        args = typing.get_args(tp)

        if origin is typing.Annotated:
            return self._schema_for(args[0])
        if origin in (typing.Union, types.UnionType):
            members = [a for a in args if a is not type(None)]
            if len(members) == 1:
                return self._schema_for(members[0])
            return _object()

        if origin is typing.Literal:
            return self._enum_schema(list(args))
        if origin is None and _is_record(tp):
            return self._record_schema(tp)

        container = origin if origin is not None else tp
        if container in SEQUENCE_TYPES:
            item = args[0] if args else None
            return Schema(type="array", items=self._schema_for(item))
        if container in MAPPING_TYPES:
            return _object()

        if isinstance(tp, type):
            if issubclass(tp, enum.Enum):
                return self._enum_schema([member.value for member in tp])
            for base, kind, fmt in PRIMITIVES:
                if issubclass(tp, base):
                    return Schema(type=kind, format=fmt)

        return _object()

    def _enum_schema(self, values: list) -> Schema:
        kinds = {type(v) for v in values}
        schema = self._schema_for(kinds.pop()) if len(kinds) == 1 else _object()
        schema.enum = values
        return schema

    def _record_schema(self, tp: type) -> Schema:
        if tp in self._expanding:
            logger.debug("recursive type %s replaced by reference", tp.__name__)
            self._recursive.add(tp)
            return Schema.reference(self._component_name(tp))

        self._expanding.append(tp)
        try:
            if dataclasses.is_dataclass(tp):
                fields = self._dataclass_fields(tp)
            else:
                fields = self._model_fields(tp)

            properties: dict[str, Schema] = {}
            required: list[str] = []
            for name, annotation, omitempty, description in fields:
                field_schema = self._schema_for(annotation)
                if description:
                    field_schema.description = description
                properties[name] = field_schema
                if not omitempty:
                    required.append(name)
        finally:
            self._expanding.pop()

        schema = Schema(type="object", properties=properties or None, required=required or None)
        if tp in self._recursive:
            # Field descriptions are set on the returned schema, not the component.
            self.components[self._component_name(tp)] = schema.model_copy(deep=True)
        return schema

    def _component_name(self, tp: type) -> str:
        name = self._names.get(tp)
        if name is None:
            name = tp.__name__
            if name in self._names.values():
                name = _COMPONENT_UNSAFE.sub("_", f"{tp.__module__}.{tp.__qualname__}")
                logger.warning("component name %s already taken, using %s", tp.__name__, name)
            self._names[tp] = name
        return name

    def _dataclass_fields(self, tp: type):
        hints = _type_hints(tp)
        for f in dataclasses.fields(tp):
            if f.name.startswith("_"):
                continue
            tag = f.metadata.get("json", "")
            if tag == "-":
                continue
            parts = tag.split(",")
            name = parts[0] or f.name
            omitempty = "omitempty" in parts[1:]
            yield name, hints.get(f.name, f.type), omitempty, f.metadata.get("description")

    def _model_fields(self, tp: type[BaseModel]):
        for field_name, info in tp.model_fields.items():
            if info.exclude is True:
                continue
            name = info.serialization_alias or info.alias or field_name
            yield name, info.annotation, not info.is_required(), info.description


def _is_record(tp) -> bool:
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def _type_hints(tp: type) -> dict:
    # Unresolvable forward references fall back to the raw annotation.
    try:
        return typing.get_type_hints(tp, include_extras=True)
    except (NameError, TypeError):
        return {}
