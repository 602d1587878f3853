"""
The resolved message model that schema generation operates on. These records
are built from protobuf descriptors by the loader and carry everything the
translation needs, so the translation itself never has to look anything up.
"""

# Standard
from dataclasses import dataclass, field
from typing import List, Optional
import enum

## Globals #####################################################################

# Field types are the FieldDescriptor.TYPE_* values, copied as-is by the loader
FieldType = int


class FieldBehavior(enum.Enum):
    """The subset of google.api.field_behavior that affects the schema"""

    OUTPUT_ONLY = "output_only"
    INPUT_ONLY = "input_only"


## Interface ###################################################################


@dataclass(frozen=True)
class MessageRef:
    """Pointer to a message type used as a field type

    Attributes:
        full_name:  str
            Fully qualified name without the leading '.' (foo.bar.Outer.Inner)
        package:  str
            The package of the file that declares the message
    """

    full_name: str
    package: str = ""

    @property
    def local_name(self) -> str:
        """The name relative to the package (Outer.Inner)"""
        if self.package and self.full_name.startswith(self.package + "."):
            return self.full_name[len(self.package) + 1 :]
        return self.full_name


@dataclass
class FieldInfo:
    """A single field of a message

    Attributes:
        name:  str
            The name as declared in the .proto file
        json_name:  str
            The name used by the JSON mapping
        type:  FieldType
            One of the FieldDescriptor.TYPE_* values
        repeated:  bool
            Whether the field is a list. Map fields are not marked repeated.
        message:  Optional[MessageRef]
            The referenced message for message typed fields
        enum_values:  List[str]
            Declared value names, in order, for enum typed fields
        map_value:  Optional[FieldInfo]
            For map fields, the value field of the map entry
        behavior:  List[FieldBehavior]
            Behavior annotations present on the field
        comment:  str
            Leading comment text
    """

    name: str
    type: FieldType
    json_name: str = ""
    repeated: bool = False
    message: Optional[MessageRef] = None
    enum_values: List[str] = field(default_factory=list)
    map_value: Optional["FieldInfo"] = None
    behavior: List[FieldBehavior] = field(default_factory=list)
    comment: str = ""

    @property
    def is_map(self) -> bool:
        return self.map_value is not None


@dataclass
class OneofGroup:
    """A named set of mutually exclusive fields"""

    name: str
    fields: List[FieldInfo] = field(default_factory=list)


@dataclass
class MessageInfo:
    """A message type along with everything declared inside of it

    Attributes:
        full_name:  str
            Fully qualified name without the leading '.'
        package:  str
            Package of the containing file
        fields:  List[FieldInfo]
            Fields that are not members of a oneof group, in declaration order
        oneofs:  List[OneofGroup]
            Oneof groups in declaration order
        nested:  List[MessageInfo]
            Nested message types in declaration order
        map_entry:  bool
            True for the synthetic entry types generated for map fields
        comment:  str
            Leading comment text
    """

    full_name: str
    package: str = ""
    fields: List[FieldInfo] = field(default_factory=list)
    oneofs: List[OneofGroup] = field(default_factory=list)
    nested: List["MessageInfo"] = field(default_factory=list)
    map_entry: bool = False
    comment: str = ""

    @property
    def name(self) -> str:
        return self.full_name.rpartition(".")[2]

    @property
    def ref(self) -> MessageRef:
        return MessageRef(full_name=self.full_name, package=self.package)
