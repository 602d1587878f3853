"""
Mapping from the shape of a single field to the JSON Schema that describes
its JSON encoding
"""

# Standard
from typing import Any, Dict, Optional
import copy

# Third Party
from google.protobuf import descriptor as _descriptor

# First Party
import alog

# Local
from . import schema_node as sn
from .config import ENUM_TYPE_STRING, GeneratorConfig
from .descriptors import FieldInfo, MessageRef
from .naming import document_reference
from .schema_node import SchemaNode

log = alog.use_channel("P2JTM")

## Globals #####################################################################

_FD = _descriptor.FieldDescriptor

# TYPE_INT32 -> "int32", used as the format for numeric fields
PRIMITIVE_TYPE_NAMES = {
    type_val: type_name[5:].lower()
    for type_name, type_val in vars(_FD).items()
    if type_name.startswith("TYPE_")
}

INTEGER_TYPES = (
    _FD.TYPE_INT32,
    _FD.TYPE_SINT32,
    _FD.TYPE_UINT32,
    _FD.TYPE_INT64,
    _FD.TYPE_SINT64,
    _FD.TYPE_UINT64,
    _FD.TYPE_SFIXED32,
    _FD.TYPE_FIXED32,
    _FD.TYPE_SFIXED64,
    _FD.TYPE_FIXED64,
)

FLOAT_TYPES = (_FD.TYPE_FLOAT, _FD.TYPE_DOUBLE)

# Messages with a dedicated JSON encoding. A value of None means that the
# field has no JSON representation and is left out entirely.
WELL_KNOWN_TYPES: Dict[str, Optional[Dict[str, Any]]] = {
    "google.protobuf.Timestamp": {
        "type": sn.TYPE_STRING,
        "format": sn.FORMAT_DATE_TIME,
    },
    "google.type.Date": {
        "type": sn.TYPE_STRING,
        "format": sn.FORMAT_DATE,
    },
    "google.type.DateTime": {
        "type": sn.TYPE_STRING,
        "format": sn.FORMAT_DATE_TIME,
    },
    "google.protobuf.Struct": {
        "type": sn.TYPE_OBJECT,
    },
    # Any JSON value except null
    "google.protobuf.Value": {
        "type": [
            sn.TYPE_STRING,
            sn.TYPE_NUMBER,
            sn.TYPE_INTEGER,
            sn.TYPE_BOOLEAN,
            sn.TYPE_OBJECT,
            sn.TYPE_ARRAY,
        ],
    },
    # Closer to JSON undefined than to null
    "google.protobuf.Empty": None,
}


## Interface ###################################################################


def schema_for_message_type(
    message: MessageRef, config: GeneratorConfig
) -> Optional[SchemaNode]:
    """Get the schema for a message typed value. Well-known types map to their
    fixed shape, everything else is a reference to the message's document.
    """
    if message.full_name in WELL_KNOWN_TYPES:
        shape = WELL_KNOWN_TYPES[message.full_name]
        log.debug3("Well-known type %s -> %s", message.full_name, shape)
        if shape is None:
            return None
        return SchemaNode(**copy.deepcopy(shape))
    return SchemaNode.reference(document_reference(message))


def schema_for_field(field: FieldInfo, config: GeneratorConfig) -> Optional[SchemaNode]:
    """Map a field to its JSON Schema

    Args:
        field:  FieldInfo
            The field to map
        config:  GeneratorConfig
            The options for this run

    Returns:
        schema:  Optional[SchemaNode]
            The schema for the field or None if the field should not appear in
            the output
    """
    if field.is_map:
        log.debug3("Handling map field %s", field.name)
        return SchemaNode(
            type=sn.TYPE_OBJECT,
            additional_properties=schema_for_field(field.map_value, config),
        )

    kind_schema = _schema_for_kind(field, config)
    if kind_schema is None:
        return None

    if field.repeated:
        log.debug3("Wrapping repeated field %s", field.name)
        return SchemaNode(type=sn.TYPE_ARRAY, items=kind_schema, default=[])

    return kind_schema


## Impl ########################################################################


def _schema_for_kind(field: FieldInfo, config: GeneratorConfig) -> Optional[SchemaNode]:
    """Get the schema for a single value of the field's type"""
    field_type = field.type

    if field_type == _FD.TYPE_MESSAGE:
        if field.message is None:
            log.warning("Message field %s has no message type", field.name)
            return None
        return schema_for_message_type(field.message, config)

    if field_type == _FD.TYPE_STRING:
        return SchemaNode(type=sn.TYPE_STRING, default="")

    if field_type in INTEGER_TYPES:
        return SchemaNode(
            type=sn.TYPE_INTEGER,
            format=PRIMITIVE_TYPE_NAMES[field_type],
            default=0,
        )

    if field_type == _FD.TYPE_ENUM:
        return _schema_for_enum(field, config)

    if field_type == _FD.TYPE_BOOL:
        return SchemaNode(type=sn.TYPE_BOOLEAN, default=False)

    if field_type in FLOAT_TYPES:
        return SchemaNode(
            type=sn.TYPE_NUMBER,
            format=PRIMITIVE_TYPE_NAMES[field_type],
            default=0.0,
        )

    if field_type == _FD.TYPE_BYTES:
        return SchemaNode(type=sn.TYPE_STRING, format=sn.FORMAT_BYTES, default="")

    log.warning(
        "Unsupported type %s for field %s",
        PRIMITIVE_TYPE_NAMES.get(field_type, field_type),
        field.name,
    )
    return None


def _schema_for_enum(field: FieldInfo, config: GeneratorConfig) -> SchemaNode:
    """Enums are either their integer value or one of the value names"""
    if config.enum_type == ENUM_TYPE_STRING:
        names = list(field.enum_values)
        return SchemaNode(
            type=sn.TYPE_STRING,
            format=sn.FORMAT_ENUM,
            enum=names,
            default=names[0] if names else None,
        )
    return SchemaNode(type=sn.TYPE_INTEGER, format=sn.FORMAT_ENUM, default=0)
