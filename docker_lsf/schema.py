"""JSON schema of a logstash-forwarder config file."""

import jsonschema

CONFIG_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "network": {
            "type": "object",
            "properties": {
                "servers": {"type": "array", "items": {"type": "string"}},
                "ssl certificate": {"type": "string"},
                "ssl key": {"type": "string"},
                "ssl ca": {"type": "string"},
                "timeout": {"type": "integer"},
            },
        },
        "files": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "paths": {"type": "array", "items": {"type": "string"}},
                    "fields": {
                        "type": "object",
                        "additionalProperties": {"type": "string"},
                    },
                },
            },
        },
    },
}

_validator = jsonschema.Draft202012Validator(CONFIG_SCHEMA)


def validate_config(data) -> list[str]:
    """Return the schema violations of a decoded config document (empty if valid)."""
    errors = sorted(_validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    messages = []
    for error in errors:
        location = "/".join(str(p) for p in error.path) or "<root>"
        messages.append(f"{location}: {error.message}")
    return messages
