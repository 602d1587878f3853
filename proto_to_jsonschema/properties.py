"""
Turn fields into named properties, decorating the mapped schema with the
field's title, description and read/write annotations
"""

# Standard
from typing import Optional

# First Party
import alog

# Local
from .config import GeneratorConfig
from .descriptors import FieldBehavior, FieldInfo
from .naming import filter_comment, format_field_name
from .schema_node import NamedSchema
from .type_mapper import schema_for_field

log = alog.use_channel("P2JPR")


def named_schema_for_field(
    field: FieldInfo,
    config: GeneratorConfig,
    property_name: Optional[str] = None,
) -> Optional[NamedSchema]:
    """Build the property for a field

    Args:
        field:  FieldInfo
            The field to convert
        config:  GeneratorConfig
            The options for this run
        property_name:  Optional[str]
            Use this name instead of the field's formatted name

    Returns:
        property:  Optional[NamedSchema]
            The named property, or None if the field maps to nothing
    """
    field_schema = schema_for_field(field, config)
    if field_schema is None:
        log.debug2("Omitting field %s with empty schema", field.name)
        return None

    if config.supports_read_write_only:
        for behavior in field.behavior:
            if behavior == FieldBehavior.OUTPUT_ONLY:
                field_schema.read_only = True
            elif behavior == FieldBehavior.INPUT_ONLY:
                field_schema.write_only = True

    name = property_name or format_field_name(field, config)

    # References stand in for the whole target document
    if not field_schema.is_reference:
        field_schema.title = name
        description = filter_comment(field.comment)
        if description:
            field_schema.description = description

    return NamedSchema(name=name, value=field_schema)
