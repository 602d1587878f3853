"""
In-memory representation of the JSON Schema documents that are generated. A
SchemaNode is a single record with every supported keyword as an optional
attribute so that serialization order is fixed regardless of the order in
which keywords are filled in.
"""

# Standard
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union
import json

## Globals #####################################################################

# JSON Schema primitive type names
TYPE_STRING = "string"
TYPE_NUMBER = "number"
TYPE_INTEGER = "integer"
TYPE_BOOLEAN = "boolean"
TYPE_OBJECT = "object"
TYPE_ARRAY = "array"
TYPE_NULL = "null"

FORMAT_DATE = "date"
FORMAT_DATE_TIME = "date-time"
FORMAT_ENUM = "enum"
FORMAT_BYTES = "bytes"

DEFINITIONS_REF_PREFIX = "#/definitions/"

JSON_INDENT = 2


## Interface ###################################################################


@dataclass
class SchemaNode:
    """A JSON Schema object. Attributes left as None are not serialized.

    The metadata "key" on each field is the JSON Schema keyword it is written
    as. Field declaration order is the serialization order.
    """

    schema: Optional[str] = field(default=None, metadata={"key": "$schema"})
    id: Optional[str] = field(default=None, metadata={"key": "$id"})
    ref: Optional[str] = field(default=None, metadata={"key": "$ref"})
    type: Optional[Union[str, List[str]]] = field(
        default=None, metadata={"key": "type"}
    )
    format: Optional[str] = field(default=None, metadata={"key": "format"})
    title: Optional[str] = field(default=None, metadata={"key": "title"})
    description: Optional[str] = field(default=None, metadata={"key": "description"})
    read_only: Optional[bool] = field(default=None, metadata={"key": "readOnly"})
    write_only: Optional[bool] = field(default=None, metadata={"key": "writeOnly"})
    default: Optional[Any] = field(default=None, metadata={"key": "default"})
    enum: Optional[List[Any]] = field(default=None, metadata={"key": "enum"})
    items: Optional["SchemaNode"] = field(default=None, metadata={"key": "items"})
    additional_properties: Optional["SchemaNode"] = field(
        default=None, metadata={"key": "additionalProperties"}
    )
    one_of: Optional[List["SchemaNode"]] = field(
        default=None, metadata={"key": "oneOf"}
    )
    properties: Optional[List["NamedSchema"]] = field(
        default=None, metadata={"key": "properties"}
    )
    definitions: Optional[List["NamedSchema"]] = field(
        default=None, metadata={"key": "definitions"}
    )

    @classmethod
    def reference(cls, ref: str) -> "SchemaNode":
        """Make a node that only points at another schema"""
        return cls(ref=ref)

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    def add_definition(self, definition: "NamedSchema") -> str:
        """Register a local definition on this node, creating the definitions
        collection on first use, and return the local reference to it
        """
        if self.definitions is None:
            self.definitions = []
        self.definitions.append(definition)
        return DEFINITIONS_REF_PREFIX + definition.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain JSON-compatible python objects"""
        out = {}
        for node_field in fields(self):
            value = getattr(self, node_field.name)
            if value is None:
                continue
            key = node_field.metadata["key"]
            if isinstance(value, SchemaNode):
                value = value.to_dict()
            elif node_field.name in ("properties", "definitions"):
                value = {named.name: named.value.to_dict() for named in value}
            elif node_field.name == "one_of":
                value = [alternative.to_dict() for alternative in value]
            elif isinstance(value, list):
                value = list(value)
            out[key] = value
        return out


@dataclass
class NamedSchema:
    """A schema with a name. This is used both for top-level documents (where
    the name determines the output file) and for properties and definitions.
    """

    name: str
    value: SchemaNode

    @property
    def file_name(self) -> str:
        return f"{self.name}.json"

    def to_json(self) -> str:
        """Serialize the schema as a JSON document"""
        return json.dumps(self.value.to_dict(), indent=JSON_INDENT) + "\n"
