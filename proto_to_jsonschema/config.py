"""
Configuration shared by every step of a single schema generation run
"""

# Standard
from dataclasses import dataclass
from typing import Dict
import re

# First Party
import alog

log = alog.use_channel("P2JCF")


## Globals #####################################################################

NAMING_JSON = "json"
NAMING_PROTO = "proto"
NAMING_CONVENTIONS = (NAMING_JSON, NAMING_PROTO)

ENUM_TYPE_INTEGER = "integer"
ENUM_TYPE_STRING = "string"
ENUM_TYPES = (ENUM_TYPE_INTEGER, ENUM_TYPE_STRING)

DEFAULT_VERSION = "http://json-schema.org/draft-07/schema#"

# Draft from which readOnly/writeOnly are meaningful
READ_WRITE_ONLY_MIN_DRAFT = "07"

# Parameter keys accepted on the protoc command line mapped to config fields
PARAMETER_KEYS = {
    "baseurl": "base_url",
    "version": "version",
    "naming": "naming",
    "enum_type": "enum_type",
}

_SCHEMA_VERSION_EXPR = re.compile(r"https*://json-schema.org/draft[/-]([^/]+)/schema")


## Interface ###################################################################


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable options for one generation run

    Attributes:
        base_url:  str
            Prefix for every document's $id
        version:  str
            The $schema value written to every document
        naming:  str
            "json" to use JSON names, "proto" to keep descriptor names
        enum_type:  str
            "integer" or "string" representation for enum fields
    """

    base_url: str = ""
    version: str = DEFAULT_VERSION
    naming: str = NAMING_JSON
    enum_type: str = ENUM_TYPE_INTEGER

    def __post_init__(self):
        if self.naming not in NAMING_CONVENTIONS:
            raise ValueError(
                f"Invalid naming convention {self.naming!r}. "
                f"Must be one of {NAMING_CONVENTIONS}"
            )
        if self.enum_type not in ENUM_TYPES:
            raise ValueError(
                f"Invalid enum type {self.enum_type!r}. Must be one of {ENUM_TYPES}"
            )
        if self.base_url and not self.base_url.endswith("/"):
            # Frozen, so go around the dataclass setattr guard
            object.__setattr__(self, "base_url", self.base_url + "/")

    @classmethod
    def from_parameter(cls, parameter: str) -> "GeneratorConfig":
        """Parse the protoc plugin parameter string

        Args:
            parameter:  str
                Comma separated key=value pairs, e.g.
                "baseurl=https://example.com/schemas,naming=proto"

        Returns:
            config:  GeneratorConfig
                The parsed configuration with defaults for missing keys
        """
        kwargs: Dict[str, str] = {}
        for part in (parameter or "").split(","):
            part = part.strip()
            if not part:
                continue
            key, _, value = part.partition("=")
            key = key.strip()
            if key not in PARAMETER_KEYS:
                raise ValueError(
                    f"Unknown parameter {key!r}. "
                    f"Must be one of {sorted(PARAMETER_KEYS.keys())}"
                )
            kwargs[PARAMETER_KEYS[key]] = value.strip()
        log.debug2("Parsed parameter %r -> %s", parameter, kwargs)
        return cls(**kwargs)

    @property
    def draft(self) -> str:
        """The JSON Schema draft identifier used to gate draft-specific
        keywords. Meta-schema URLs on json-schema.org are reduced to their
        draft component, anything else is taken as-is.
        """
        match = _SCHEMA_VERSION_EXPR.search(self.version)
        if match:
            return match.group(1)
        return self.version

    @property
    def supports_read_write_only(self) -> bool:
        """Whether readOnly and writeOnly may be emitted"""
        return self.draft >= READ_WRITE_ONLY_MIN_DRAFT

    @property
    def use_json_names(self) -> bool:
        return self.naming == NAMING_JSON
