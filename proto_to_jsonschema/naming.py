"""
Naming rules for documents, properties and references along with the
extraction of descriptions from comments
"""

# Standard
import re

# Local
from .config import GeneratorConfig
from .descriptors import FieldInfo, MessageRef, OneofGroup
from .utils import to_upper_camel

## Globals #####################################################################

# Linter directives embedded in comments, e.g. "(-- api-linter: ... --)"
LINTER_RULE_EXPR = re.compile(r"\(-- .* --\)")

DOCUMENT_EXTENSION = ".json"


## Interface ###################################################################


def format_oneof_name(oneof: OneofGroup, config: GeneratorConfig) -> str:
    """Get the property name for a oneof group. The JSON convention uses the
    lowerCamel form of the group name.
    """
    if not config.use_json_names:
        return oneof.name
    name = to_upper_camel(oneof.name)
    if name:
        return name[0].lower() + name[1:]
    return name


def format_field_name(field: FieldInfo, config: GeneratorConfig) -> str:
    """Get the property name for a field"""
    if not config.use_json_names:
        return field.name
    return field.json_name or field.name


def document_name(message: MessageRef) -> str:
    """Get the name of the document generated for a message: its name relative
    to the package with scopes joined by '_'
    """
    return message.local_name.replace(".", "_")


def document_reference(message: MessageRef) -> str:
    """Get the $ref value that points at the document for a message"""
    return document_name(message) + DOCUMENT_EXTENSION


def filter_comment(comment: str, remove_new_lines: bool = True) -> str:
    """Clean up a comment for use as a description

    Args:
        comment:  str
            The raw comment text
        remove_new_lines:  bool
            Whether to drop line breaks

    Returns:
        description:  str
            The cleaned text, empty if nothing is left
    """
    if remove_new_lines:
        comment = comment.replace("\n", "")
    comment = LINTER_RULE_EXPR.sub("", comment)
    return comment.strip()
