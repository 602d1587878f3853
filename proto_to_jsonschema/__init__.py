"""
This library holds utilities for converting Protobuf message definitions to
JSON Schema documents describing their HTTP/JSON transcoded form.

Rerferences:
* https://json-schema.org/
* https://developers.google.com/protocol-buffers/docs/proto3#json

Example:

```
from google.protobuf import timestamp_pb2
import proto_to_jsonschema

# One document per message in the file
for schema in proto_to_jsonschema.descriptor_to_json_schemas(
    timestamp_pb2.DESCRIPTOR,
    proto_to_jsonschema.GeneratorConfig(naming="proto"),
):
    with open(schema.file_name, "w") as handle:
        handle.write(schema.to_json())
```
"""

# Local
from .config import GeneratorConfig
from .descriptor_loader import DescriptorLoader, load_messages
from .descriptor_to_json_schema import descriptor_to_json_schemas
from .schema_builder import build_schemas
from .schema_node import NamedSchema, SchemaNode
