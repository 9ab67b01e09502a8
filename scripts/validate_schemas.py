"""Runs jsonschema meta-validation for every bundled request schema."""

from pathlib import Path
import json
import sys

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError


SCHEMA_DIR = Path(__file__).resolve().parent.parent / "crypto_server" / "schemas"


def validate() -> int:
    failures = 0
    for schema in sorted(SCHEMA_DIR.glob("*.json")):
        data = json.loads(schema.read_text())
        try:
            Draft202012Validator.check_schema(data)
        except SchemaError as exc:
            failures += 1
            print(f"{schema.name}: {exc.message}", file=sys.stderr)
    return failures


if __name__ == "__main__":
    sys.exit(1 if validate() else 0)
