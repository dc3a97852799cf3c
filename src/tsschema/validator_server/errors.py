"""Exceptions raised while turning declarations into validators.

Every condition below aborts the whole batch. Duplicate declaration names are
not an error; they are only logged.
"""


class ValidatorGenerationError(Exception):
    """Base exception for validator generation errors"""

    code = "GENERATION_ERROR"


class UnresolvableTypeError(ValidatorGenerationError):
    """Raised when no primitive, custom type or earlier declaration matches a type"""

    code = "UNRESOLVABLE_TYPE"

    def __init__(self, raw_type: str):
        self.raw_type = raw_type
        super().__init__(f'Validator not implemented for TS type "{raw_type}"')


class MalformedDeclarationError(ValidatorGenerationError):
    """Raised when parser output does not have the declaration shape"""

    code = "NOT_IMPLEMENTED"


class NoFilesFoundError(ValidatorGenerationError):
    """Raised when file discovery matches nothing"""

    code = "NO_FILES_FOUND"


class DeclarationParseError(ValidatorGenerationError):
    """Raised when a discovered file cannot be read or parsed"""

    code = "PARSE_ERROR"

    def __init__(self, message: str, file: str | None = None, line: int | None = None):
        self.file = file
        self.line = line
        super().__init__(message)
