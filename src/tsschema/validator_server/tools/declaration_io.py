"""JSON interchange for parsed declarations.

Parsing and resolution can run in different processes: one side dumps the
parsed files, the other loads them back as plain JSON objects. The batch
processor accepts those objects through its structural fallback.
"""

import json
from collections.abc import Sequence
from typing import Any

from ..errors import MalformedDeclarationError
from ..models.declaration_models import ParsedFile


def dump_parsed_files(parsed_files: Sequence[ParsedFile]) -> str:
    return json.dumps([parsed_file.to_dict() for parsed_file in parsed_files])


def load_parsed_files(declarations_json: str) -> list[dict[str, Any]]:
    """
    Load JSON produced by dump_parsed_files.

    Raises:
        MalformedDeclarationError: if the text is not JSON or not a list of files
    """
    try:
        parsed = json.loads(declarations_json)
    except json.JSONDecodeError as e:
        raise MalformedDeclarationError(f"Invalid declarations JSON: {e}") from e

    if not isinstance(parsed, list):
        raise MalformedDeclarationError(f"Declarations JSON must be a list of files, got {type(parsed).__name__}")

    return parsed
