"""TSSchema - runtime validators derived from TypeScript interfaces and classes.

Example:
    from typing import Annotated
    from pydantic import Field
    from tsschema import ResolverRegistry, generate_validators

    registry = ResolverRegistry(
        modifiers={"MaxLength<>": lambda schema, limit: Annotated[schema, Field(max_length=int(limit))]},
    )
    validators = await generate_validators("src/models/**/*.ts", registry)
    validators["User"].model_validate({"name": "Ann"})
"""

from .validator_server.errors import (
    DeclarationParseError,
    MalformedDeclarationError,
    NoFilesFoundError,
    UnresolvableTypeError,
    ValidatorGenerationError,
)
from .validator_server.tools.batch_processor import BatchResult, convert_parsed_files, declarations_to_validators
from .validator_server.tools.generate_validators import (
    export_declarations,
    export_json_schemas,
    generate_validators,
    import_declarations,
)
from .validator_server.tools.resolver_registry import EMPTY_REGISTRY, ResolverRegistry

__version__ = "0.1.0"

__all__ = [
    "EMPTY_REGISTRY",
    "BatchResult",
    "DeclarationParseError",
    "MalformedDeclarationError",
    "NoFilesFoundError",
    "ResolverRegistry",
    "UnresolvableTypeError",
    "ValidatorGenerationError",
    "convert_parsed_files",
    "declarations_to_validators",
    "export_declarations",
    "export_json_schemas",
    "generate_validators",
    "import_declarations",
]
