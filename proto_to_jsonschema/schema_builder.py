"""
Build the set of JSON Schema documents for a list of messages
"""

# Standard
from typing import Iterable, List

# First Party
import alog

# Local
from . import schema_node as sn
from .config import GeneratorConfig
from .descriptors import MessageInfo
from .naming import DOCUMENT_EXTENSION, document_name, filter_comment
from .oneof_expander import add_oneof_fields_to_schema
from .properties import named_schema_for_field
from .schema_node import NamedSchema, SchemaNode

log = alog.use_channel("P2JSB")


## Interface ###################################################################


def build_schemas(
    messages: Iterable[MessageInfo],
    config: GeneratorConfig,
) -> List[NamedSchema]:
    """Create one document per message, including nested messages

    Nested messages get their own documents which appear in the output before
    the document of the message that contains them.

    Args:
        messages:  Iterable[MessageInfo]
            The messages to generate documents for
        config:  GeneratorConfig
            The options for this run

    Returns:
        schemas:  List[NamedSchema]
            The documents in depth-first order
    """
    schemas = []
    for message in messages:
        schema_name = document_name(message.ref)
        log.debug("Building schema %s for %s", schema_name, message.full_name)
        schema = setup_schema_for_message(schema_name, message.comment, config)

        # Nested messages are standalone documents
        schemas.extend(build_schemas(message.nested, config))

        if message.map_entry:
            log.debug3("Skipping map entry %s", message.full_name)
            continue

        add_oneof_fields_to_schema(message.oneofs, schema, config)

        for field in message.fields:
            named_schema = named_schema_for_field(field, config)
            if named_schema is None:
                continue
            schema.value.properties.append(named_schema)

        schemas.append(schema)
    return schemas


def setup_schema_for_message(
    schema_name: str,
    comment: str,
    config: GeneratorConfig,
) -> NamedSchema:
    """Create the empty document for a message"""
    schema = NamedSchema(
        name=schema_name,
        value=SchemaNode(
            schema=config.version,
            id=f"{config.base_url}{schema_name}{DOCUMENT_EXTENSION}",
            type=sn.TYPE_OBJECT,
            title=schema_name,
            properties=[],
        ),
    )
    description = filter_comment(comment)
    if description:
        schema.value.description = description
    return schema
