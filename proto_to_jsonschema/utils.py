"""
Common string utilities
"""

# Standard
import re


def to_upper_camel(snake_str: str) -> str:
    """Convert a snake_case string to UpperCamelCase"""
    if not snake_str:
        return snake_str
    return (
        snake_str[0].upper()
        + re.sub("_([a-zA-Z])", lambda pat: pat.group(1).upper(), snake_str)[1:]
    )


def to_json_name(field_name: str) -> str:
    """Compute the default JSON name for a field the same way protoc does when
    json_name is not set explicitly: underscores are dropped and the character
    following each one is upper cased.
    """
    parts = []
    capitalize_next = False
    for char in field_name:
        if char == "_":
            capitalize_next = True
        elif capitalize_next:
            parts.append(char.upper())
            capitalize_next = False
        else:
            parts.append(char)
    return "".join(parts)
