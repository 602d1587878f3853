"""
Expansion of oneof groups into tagged unions.

Each member of a group becomes a local definition on the owning document that
holds a "kind" discriminator naming the member and a "value" holding the
member's data. The group itself becomes a property whose schema accepts null
or any one of those definitions:

    "contact": {
      "oneOf": [
        {"type": "null"},
        {"$ref": "#/definitions/Book_email"},
        {"$ref": "#/definitions/Book_phone"}
      ]
    }
"""

# Standard
from typing import List

# First Party
import alog

# Local
from . import schema_node as sn
from .config import GeneratorConfig
from .descriptors import OneofGroup
from .naming import format_oneof_name
from .properties import named_schema_for_field
from .schema_node import NamedSchema, SchemaNode

log = alog.use_channel("P2JOF")

## Globals #####################################################################

KIND_PROPERTY = "kind"
VALUE_PROPERTY = "value"


## Interface ###################################################################


def add_oneof_fields_to_schema(
    oneofs: List[OneofGroup],
    schema: NamedSchema,
    config: GeneratorConfig,
):
    """Add one union property per oneof group to the given document, along
    with the definitions for each of the group's members

    Args:
        oneofs:  List[OneofGroup]
            The groups declared on the message
        schema:  NamedSchema
            The document for the message. Modified in place.
        config:  GeneratorConfig
            The options for this run
    """
    for oneof in oneofs:
        log.debug2("Expanding oneof %s on %s", oneof.name, schema.name)
        oneof_schema = SchemaNode(one_of=[SchemaNode(type=sn.TYPE_NULL)])

        for field in oneof.fields:
            definition_name = f"{schema.name}_{field.name}"
            value_property = named_schema_for_field(
                field, config, property_name=VALUE_PROPERTY
            )
            if value_property is None:
                log.warning(
                    "Skipping oneof member %s.%s with no schema",
                    oneof.name,
                    field.name,
                )
                continue

            definition = NamedSchema(
                name=definition_name,
                value=SchemaNode(
                    type=sn.TYPE_OBJECT,
                    title=definition_name,
                    properties=[build_kind_property(field.name), value_property],
                ),
            )
            ref = schema.value.add_definition(definition)
            oneof_schema.one_of.append(SchemaNode.reference(ref))

        schema.value.properties.append(
            NamedSchema(name=format_oneof_name(oneof, config), value=oneof_schema)
        )


def build_kind_property(member_name: str) -> NamedSchema:
    """Make the discriminator property that names the populated member"""
    return NamedSchema(
        name=KIND_PROPERTY,
        value=SchemaNode(
            type=sn.TYPE_STRING,
            title=KIND_PROPERTY,
            default=member_name,
            enum=[member_name],
        ),
    )
