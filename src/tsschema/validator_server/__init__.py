"""Validator server: TypeScript declarations to pydantic validators."""
