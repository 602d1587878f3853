"""
Generate JSON Schema documents straight from in-memory descriptors, e.g. the
DESCRIPTOR of a compiled _pb2 module or message class
"""

# Standard
from typing import List, Optional, Union

# Third Party
from google.protobuf import descriptor as _descriptor
from google.protobuf import descriptor_pb2

# First Party
import alog

# Local
from .config import GeneratorConfig
from .descriptor_loader import load_messages
from .descriptors import MessageInfo
from .schema_builder import build_schemas
from .schema_node import NamedSchema

log = alog.use_channel("P2JDS")


## Interface ###################################################################


def descriptor_to_json_schemas(
    descriptor: Union[_descriptor.FileDescriptor, _descriptor.Descriptor],
    config: Optional[GeneratorConfig] = None,
) -> List[NamedSchema]:
    """Generate the documents for a file or a single message

    Args:
        descriptor:  Union[descriptor.FileDescriptor, descriptor.Descriptor]
            A file descriptor to generate documents for every message in the
            file, or a message descriptor to generate documents for the message
            and its nested messages

    Kwargs:
        config:  Optional[GeneratorConfig]
            The options to use. Defaults are used if not given.

    Returns:
        schemas:  List[NamedSchema]
            The generated documents
    """
    config = config or GeneratorConfig()
    message_name = None
    if isinstance(descriptor, _descriptor.Descriptor):
        message_name = descriptor.full_name
        file_descriptor = descriptor.file
    elif isinstance(descriptor, _descriptor.FileDescriptor):
        file_descriptor = descriptor
    else:
        raise ValueError(f"Invalid descriptor of type {type(descriptor)}")

    messages = load_messages(_collect_file_protos(file_descriptor), file_descriptor.name)
    if message_name is not None:
        messages = [_find_message(messages, message_name)]
    return build_schemas(messages, config)


## Impl ########################################################################


def _collect_file_protos(
    file_descriptor: _descriptor.FileDescriptor,
) -> List[descriptor_pb2.FileDescriptorProto]:
    """Copy a file and everything it transitively imports to protos"""
    fd_protos = []
    seen = set()
    pending = [file_descriptor]
    while pending:
        current = pending.pop()
        if current.name in seen:
            continue
        seen.add(current.name)
        log.debug3("Copying file descriptor %s", current.name)
        fd_proto = descriptor_pb2.FileDescriptorProto()
        current.CopyToProto(fd_proto)
        fd_protos.append(fd_proto)
        pending.extend(current.dependencies)
    return fd_protos


def _find_message(messages: List[MessageInfo], full_name: str) -> MessageInfo:
    for message in messages:
        if message.full_name == full_name:
            return message
        if full_name.startswith(message.full_name + "."):
            return _find_message(message.nested, full_name)
    raise ValueError(f"Message {full_name} not found")
