"""
Conversion of raw FileDescriptorProtos (as handed to a protoc plugin) into the
resolved message model used for schema generation
"""

# Standard
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

# Third Party
from google.api import field_behavior_pb2
from google.protobuf import descriptor_pb2

# First Party
import alog

# Local
from .descriptors import FieldBehavior, FieldInfo, MessageInfo, MessageRef, OneofGroup
from .utils import to_json_name

log = alog.use_channel("P2JDL")

## Globals #####################################################################

_FDP = descriptor_pb2.FieldDescriptorProto

# Field numbers within the descriptor protos used to build source code paths
FILE_MESSAGE_TYPE_PATH = descriptor_pb2.FileDescriptorProto.MESSAGE_TYPE_FIELD_NUMBER
MESSAGE_FIELD_PATH = descriptor_pb2.DescriptorProto.FIELD_FIELD_NUMBER
MESSAGE_NESTED_TYPE_PATH = descriptor_pb2.DescriptorProto.NESTED_TYPE_FIELD_NUMBER

BEHAVIOR_MAPPING = {
    field_behavior_pb2.OUTPUT_ONLY: FieldBehavior.OUTPUT_ONLY,
    field_behavior_pb2.INPUT_ONLY: FieldBehavior.INPUT_ONLY,
}

_SourcePath = Tuple[int, ...]


## Interface ###################################################################


def load_messages(
    file_protos: Iterable[descriptor_pb2.FileDescriptorProto],
    file_name: str,
) -> List[MessageInfo]:
    """Load the top-level messages of a single file

    Args:
        file_protos:  Iterable[descriptor_pb2.FileDescriptorProto]
            Every file needed to resolve the types used by the target file
        file_name:  str
            The name of the file whose messages should be loaded

    Returns:
        messages:  List[MessageInfo]
            The top-level messages of the file with nested messages attached
    """
    return DescriptorLoader(file_protos).load_file(file_name)


class DescriptorLoader:
    """Resolves messages across a set of files"""

    def __init__(self, file_protos: Iterable[descriptor_pb2.FileDescriptorProto]):
        self.files = {fd_proto.name: fd_proto for fd_proto in file_protos}
        self.symbols = _build_symbol_table(self.files.values())
        log.debug2(
            "Loaded %d files with %d symbols", len(self.files), len(self.symbols)
        )

    def load_file(self, file_name: str) -> List[MessageInfo]:
        """Load the top-level messages of one of the known files"""
        fd_proto = self.files.get(file_name)
        if fd_proto is None:
            raise ValueError(f"Unknown file {file_name}")
        log.debug("Loading messages from %s", file_name)
        comments = _leading_comments(fd_proto)
        return [
            self._load_message(
                message_proto,
                scope=fd_proto.package,
                package=fd_proto.package,
                path=(FILE_MESSAGE_TYPE_PATH, idx),
                comments=comments,
            )
            for idx, message_proto in enumerate(fd_proto.message_type)
        ]

    ## Impl ##

    def _load_message(
        self,
        message_proto: descriptor_pb2.DescriptorProto,
        scope: str,
        package: str,
        path: _SourcePath,
        comments: Dict[_SourcePath, str],
    ) -> MessageInfo:
        full_name = _join_name(scope, message_proto.name)
        log.debug2("Loading message %s", full_name)
        message = MessageInfo(
            full_name=full_name,
            package=package,
            map_entry=message_proto.options.map_entry,
            comment=comments.get(path, ""),
        )

        message.nested = [
            self._load_message(
                nested_proto,
                scope=full_name,
                package=package,
                path=path + (MESSAGE_NESTED_TYPE_PATH, idx),
                comments=comments,
            )
            for idx, nested_proto in enumerate(message_proto.nested_type)
        ]

        # Oneofs that only exist to track presence of proto3 optional fields
        # are not real groups
        groups: Dict[int, OneofGroup] = {}
        for oneof_index, oneof_proto in enumerate(message_proto.oneof_decl):
            members = [
                field_proto
                for field_proto in message_proto.field
                if field_proto.HasField("oneof_index")
                and field_proto.oneof_index == oneof_index
            ]
            if members and all(member.proto3_optional for member in members):
                log.debug3("Skipping synthetic oneof %s", oneof_proto.name)
                continue
            groups[oneof_index] = OneofGroup(name=oneof_proto.name)

        for idx, field_proto in enumerate(message_proto.field):
            field = self._load_field(
                field_proto,
                comment=comments.get(path + (MESSAGE_FIELD_PATH, idx), ""),
            )
            group = None
            if field_proto.HasField("oneof_index"):
                group = groups.get(field_proto.oneof_index)
            if group is not None:
                group.fields.append(field)
            else:
                message.fields.append(field)

        message.oneofs = list(groups.values())
        return message

    def _load_field(
        self,
        field_proto: descriptor_pb2.FieldDescriptorProto,
        comment: str = "",
    ) -> FieldInfo:
        field = FieldInfo(
            name=field_proto.name,
            type=field_proto.type,
            json_name=(
                field_proto.json_name
                if field_proto.HasField("json_name")
                else to_json_name(field_proto.name)
            ),
            repeated=field_proto.label == _FDP.LABEL_REPEATED,
            behavior=_get_behavior(field_proto),
            comment=comment,
        )

        if field_proto.type == _FDP.TYPE_MESSAGE:
            symbol = self._resolve(field_proto)
            entry = symbol.descriptor_proto
            if entry.options.map_entry:
                value_proto = next(
                    entry_field
                    for entry_field in entry.field
                    if entry_field.name == "value"
                )
                log.debug3("Field %s is a map", field_proto.name)
                field.map_value = self._load_field(value_proto)
                field.repeated = False
            else:
                field.message = MessageRef(
                    full_name=symbol.full_name, package=symbol.package
                )

        elif field_proto.type == _FDP.TYPE_ENUM:
            symbol = self._resolve(field_proto)
            field.enum_values = [value.name for value in symbol.descriptor_proto.value]

        return field

    def _resolve(self, field_proto: descriptor_pb2.FieldDescriptorProto) -> "_Symbol":
        type_name = field_proto.type_name.lstrip(".")
        symbol = self.symbols.get(type_name)
        if symbol is None:
            raise ValueError(
                f"Cannot resolve type {field_proto.type_name} of field {field_proto.name}"
            )
        return symbol


## Implementation Details ######################################################


@dataclass(frozen=True)
class _Symbol:
    full_name: str
    package: str
    descriptor_proto: object


def _join_name(scope: str, name: str) -> str:
    return f"{scope}.{name}" if scope else name


def _build_symbol_table(
    file_protos: Iterable[descriptor_pb2.FileDescriptorProto],
) -> Dict[str, _Symbol]:
    """Index every message and enum by its fully qualified name"""
    symbols = {}

    def add_message(scope: str, package: str, message_proto):
        full_name = _join_name(scope, message_proto.name)
        symbols[full_name] = _Symbol(full_name, package, message_proto)
        for enum_proto in message_proto.enum_type:
            enum_name = _join_name(full_name, enum_proto.name)
            symbols[enum_name] = _Symbol(enum_name, package, enum_proto)
        for nested_proto in message_proto.nested_type:
            add_message(full_name, package, nested_proto)

    for fd_proto in file_protos:
        for enum_proto in fd_proto.enum_type:
            enum_name = _join_name(fd_proto.package, enum_proto.name)
            symbols[enum_name] = _Symbol(enum_name, fd_proto.package, enum_proto)
        for message_proto in fd_proto.message_type:
            add_message(fd_proto.package, fd_proto.package, message_proto)
    return symbols


def _leading_comments(
    fd_proto: descriptor_pb2.FileDescriptorProto,
) -> Dict[_SourcePath, str]:
    """Map source code paths to the leading comment at that location"""
    return {
        tuple(location.path): location.leading_comments
        for location in fd_proto.source_code_info.location
        if location.leading_comments
    }


def _get_behavior(field_proto: descriptor_pb2.FieldDescriptorProto) -> List[FieldBehavior]:
    """Read the google.api.field_behavior annotations that matter for JSON"""
    behavior = []
    known_values = field_behavior_pb2.FieldBehavior.values()
    for value in field_proto.options.Extensions[field_behavior_pb2.field_behavior]:
        if value not in known_values:
            log.warning(
                "Unrecognized field behavior %s on field %s", value, field_proto.name
            )
        elif value in BEHAVIOR_MAPPING:
            behavior.append(BEHAVIOR_MAPPING[value])
    return behavior
