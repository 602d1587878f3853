"""
Common test helpers
"""

# Standard
from typing import List, Optional
import os

# Third Party
from google.api import field_behavior_pb2
from google.protobuf import descriptor_pb2, empty_pb2, timestamp_pb2
import pytest

# First Party
import alog

# Local
from proto_to_jsonschema.config import GeneratorConfig

# Global logging config
alog.configure(
    default_level=os.environ.get("LOG_LEVEL", "info"),
    filters=os.environ.get("LOG_FILTERS", ""),
    formatter="json" if os.environ.get("LOG_JSON", "").lower() == "true" else "pretty",
    thread_id=os.environ.get("LOG_THREAD_ID", "").lower() == "true",
)

_FDP = descriptor_pb2.FieldDescriptorProto

BOOK_FILE_NAME = "library/v1/book.proto"
BOOK_PACKAGE = "library.v1"


## Helpers #####################################################################


def make_field(
    name: str,
    number: int,
    field_type: int,
    type_name: str = "",
    repeated: bool = False,
    oneof_index: Optional[int] = None,
    behavior: Optional[List[int]] = None,
    **kwargs,
) -> descriptor_pb2.FieldDescriptorProto:
    """Shorthand for building a FieldDescriptorProto"""
    field_kwargs = {
        "name": name,
        "number": number,
        "type": field_type,
        "label": _FDP.LABEL_REPEATED if repeated else _FDP.LABEL_OPTIONAL,
    }
    if type_name:
        field_kwargs["type_name"] = type_name
    if oneof_index is not None:
        field_kwargs["oneof_index"] = oneof_index
    field_kwargs.update(kwargs)
    field_proto = _FDP(**field_kwargs)
    for value in behavior or []:
        field_proto.options.Extensions[field_behavior_pb2.field_behavior].append(value)
    return field_proto


def make_file(
    messages: List[descriptor_pb2.DescriptorProto],
    name: str = "test/v1/test.proto",
    package: str = "test.v1",
    enums: Optional[List[descriptor_pb2.EnumDescriptorProto]] = None,
    dependency: Optional[List[str]] = None,
) -> descriptor_pb2.FileDescriptorProto:
    return descriptor_pb2.FileDescriptorProto(
        name=name,
        package=package,
        syntax="proto3",
        message_type=messages,
        enum_type=enums or [],
        dependency=dependency or [],
    )


def well_known_file(module) -> descriptor_pb2.FileDescriptorProto:
    """Get the FileDescriptorProto for one of the compiled well-known types"""
    fd_proto = descriptor_pb2.FileDescriptorProto()
    module.DESCRIPTOR.CopyToProto(fd_proto)
    return fd_proto


def make_book_file() -> descriptor_pb2.FileDescriptorProto:
    """A file exercising every kind of field:

    // A book.
    // (-- api-linter: core::0123=disabled --)
    message Book {
      message LabelsEntry { ... }
      // A chapter of the book
      message Chapter {
        string name = 1;
        int64 page_count = 2;
      }
      // The title.
      string title = 1;
      google.protobuf.Timestamp published = 2;
      oneof contact {
        string email = 3;
        string phone = 4;
      }
      repeated string tags = 5;
      map<string, int32> labels = 6;
      repeated Chapter chapters = 7;
      Genre genre = 8;
      google.protobuf.Timestamp create_time = 9 [(google.api.field_behavior) = OUTPUT_ONLY];
      string secret = 10 [(google.api.field_behavior) = INPUT_ONLY];
      google.protobuf.Empty nothing = 11;
    }
    """
    book = descriptor_pb2.DescriptorProto(
        name="Book",
        field=[
            make_field("title", 1, _FDP.TYPE_STRING),
            make_field("published", 2, _FDP.TYPE_MESSAGE, ".google.protobuf.Timestamp"),
            make_field("email", 3, _FDP.TYPE_STRING, oneof_index=0),
            make_field("phone", 4, _FDP.TYPE_STRING, oneof_index=0),
            make_field("tags", 5, _FDP.TYPE_STRING, repeated=True),
            make_field(
                "labels",
                6,
                _FDP.TYPE_MESSAGE,
                ".library.v1.Book.LabelsEntry",
                repeated=True,
            ),
            make_field(
                "chapters",
                7,
                _FDP.TYPE_MESSAGE,
                ".library.v1.Book.Chapter",
                repeated=True,
            ),
            make_field("genre", 8, _FDP.TYPE_ENUM, ".library.v1.Genre"),
            make_field(
                "create_time",
                9,
                _FDP.TYPE_MESSAGE,
                ".google.protobuf.Timestamp",
                behavior=[field_behavior_pb2.OUTPUT_ONLY],
            ),
            make_field(
                "secret",
                10,
                _FDP.TYPE_STRING,
                behavior=[field_behavior_pb2.INPUT_ONLY],
            ),
            make_field("nothing", 11, _FDP.TYPE_MESSAGE, ".google.protobuf.Empty"),
        ],
        nested_type=[
            descriptor_pb2.DescriptorProto(
                name="LabelsEntry",
                field=[
                    make_field("key", 1, _FDP.TYPE_STRING),
                    make_field("value", 2, _FDP.TYPE_INT32),
                ],
                options=descriptor_pb2.MessageOptions(map_entry=True),
            ),
            descriptor_pb2.DescriptorProto(
                name="Chapter",
                field=[
                    make_field("name", 1, _FDP.TYPE_STRING),
                    make_field("page_count", 2, _FDP.TYPE_INT64),
                ],
            ),
        ],
        oneof_decl=[descriptor_pb2.OneofDescriptorProto(name="contact")],
    )
    genre = descriptor_pb2.EnumDescriptorProto(
        name="Genre",
        value=[
            descriptor_pb2.EnumValueDescriptorProto(name="GENRE_UNSPECIFIED", number=0),
            descriptor_pb2.EnumValueDescriptorProto(name="FICTION", number=1),
            descriptor_pb2.EnumValueDescriptorProto(name="HISTORY", number=2),
        ],
    )
    fd_proto = make_file(
        [book],
        name=BOOK_FILE_NAME,
        package=BOOK_PACKAGE,
        enums=[genre],
        dependency=[
            timestamp_pb2.DESCRIPTOR.name,
            empty_pb2.DESCRIPTOR.name,
            "google/api/field_behavior.proto",
        ],
    )
    comments = {
        (4, 0): " A book.\n (-- api-linter: core::0123=disabled --)\n",
        (4, 0, 3, 1): " A chapter of the book\n",
        (4, 0, 2, 0): " The title.\n",
    }
    for path, comment in comments.items():
        fd_proto.source_code_info.location.add(
            path=list(path), leading_comments=comment
        )
    return fd_proto


## Fixtures ####################################################################


@pytest.fixture
def book_files() -> List[descriptor_pb2.FileDescriptorProto]:
    """The book file along with the files it depends on"""
    return [
        make_book_file(),
        well_known_file(timestamp_pb2),
        well_known_file(empty_pb2),
    ]


@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig(base_url="https://example.com/schemas")
