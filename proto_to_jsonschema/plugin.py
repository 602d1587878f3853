"""
protoc-gen-jsonschema: a protoc plugin that writes one JSON Schema document
per message.

This plugin reads a CodeGeneratorRequest from stdin and writes a
CodeGeneratorResponse to stdout, following the protoc plugin protocol.

Usage:
    protoc --jsonschema_out=baseurl=https://example.com/schemas,naming=proto:./out \
        foo.proto
"""

# Standard
import os
import sys

# Third Party
from google.protobuf.compiler import plugin_pb2

# First Party
import alog

# Local
from .config import GeneratorConfig
from .descriptor_loader import DescriptorLoader
from .schema_builder import build_schemas

log = alog.use_channel("P2JPL")


## Interface ###################################################################


def generate(
    request: plugin_pb2.CodeGeneratorRequest,
) -> plugin_pb2.CodeGeneratorResponse:
    """Build the response for a plugin request

    Args:
        request:  plugin_pb2.CodeGeneratorRequest
            The request sent by protoc

    Returns:
        response:  plugin_pb2.CodeGeneratorResponse
            One generated file per document, or the error if the request could
            not be handled
    """
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = (
        plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL
    )
    try:
        config = GeneratorConfig.from_parameter(request.parameter)
        loader = DescriptorLoader(request.proto_file)
        for file_name in request.file_to_generate:
            log.debug("Generating schemas for %s", file_name)
            for schema in build_schemas(loader.load_file(file_name), config):
                log.debug2("Writing %s", schema.file_name)
                out_file = response.file.add()
                out_file.name = schema.file_name
                out_file.content = schema.to_json()
    except ValueError as err:
        log.error("Failed to generate schemas: %s", err)
        response.error = str(err)
        del response.file[:]
    return response


def main() -> int:
    """Entry point for protoc"""
    alog.configure(
        default_level=os.environ.get("LOG_LEVEL", "warning"),
        filters=os.environ.get("LOG_FILTERS", ""),
        formatter="json" if os.environ.get("LOG_JSON", "").lower() == "true" else "pretty",
    )

    if sys.stdin.isatty():
        print(
            "protoc-gen-jsonschema is a protoc plugin, it is not intended for direct use.",
            file=sys.stderr,
        )
        print("Usage: protoc --jsonschema_out=<options>:<dir> <files>", file=sys.stderr)
        return 1

    request = plugin_pb2.CodeGeneratorRequest()
    request.ParseFromString(sys.stdin.buffer.read())
    response = generate(request)
    sys.stdout.buffer.write(response.SerializeToString())
    return 0
