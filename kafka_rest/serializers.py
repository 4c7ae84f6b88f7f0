"""
Serialization helpers for REST proxy payloads.

The proxy embeds keys and values in JSON bodies: binary data travels as
base64 strings, JSON data as-is, and Avro data as JSON alongside a schema.
"""

import base64
import json
from typing import Any, Iterable, Optional, Union

import fastavro
from fastavro.validation import ValidationError, validate

from kafka_rest.errors import SchemaError


def encode_binary(data: Optional[Union[bytes, str]]) -> Optional[str]:
    """Encode raw bytes to the base64 string expected for binary format.

    Args:
        data: Raw bytes, or text which is UTF-8 encoded first

    Returns:
        Base64 ASCII string, or None when data is None
    """
    if data is None:
        return None
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def decode_binary(data: Optional[str]) -> Optional[bytes]:
    """Decode a base64 string received in binary format back to bytes."""
    if data is None:
        return None
    return base64.b64decode(data)


def parse_avro_schema(schema: str) -> Any:
    """Parse an Avro schema given as a JSON string.

    Args:
        schema: Avro schema in its JSON text form

    Returns:
        The parsed schema, as returned by fastavro

    Raises:
        SchemaError: If the text is not JSON or not a valid Avro schema
    """
    try:
        return fastavro.parse_schema(json.loads(schema))
    except Exception as e:
        raise SchemaError(f"Invalid Avro schema: {e}") from e


def validate_avro_records(schema: str, records: Iterable[Any]) -> None:
    """Check that every datum matches an Avro schema.

    Args:
        schema: Avro schema in its JSON text form
        records: Record values (or keys) to check

    Raises:
        SchemaError: If the schema does not parse or a datum does not match it
    """
    parsed = parse_avro_schema(schema)
    for index, datum in enumerate(records):
        try:
            validate(datum, parsed, raise_errors=True)
        except ValidationError as e:
            raise SchemaError(f"Record {index} does not match Avro schema: {e}") from e


def dumps(obj: Any) -> str:
    """Render a model (or any JSON-compatible value) as indented JSON."""
    if hasattr(obj, "to_dict"):
        obj = obj.to_dict()
    elif isinstance(obj, (list, tuple)):
        obj = [item.to_dict() if hasattr(item, "to_dict") else item for item in obj]
    return json.dumps(obj, indent=2)
