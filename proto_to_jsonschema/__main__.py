"""Module entry point for `python -m proto_to_jsonschema`."""

# Local
from .plugin import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
