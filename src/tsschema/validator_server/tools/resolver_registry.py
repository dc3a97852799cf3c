"""
Pluggable resolver registry threaded through type resolution.

The registry is an immutable value. Resolving a declaration never changes the
registry it was given; `with_interface` hands back a new registry whose
forward-reference table is a copy extended by one entry.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from .schema_builder import Schema

TypeFactory = Callable[..., Schema | Awaitable[Schema]]
Modifier = Callable[..., Schema | Awaitable[Schema]]


@dataclass(frozen=True, eq=False)
class ResolverRegistry:
    """
    Lookup tables used while resolving type expressions.

    Attributes:
        types: name -> factory(*parameters) returning a schema, for names that
            are not built-in primitives. Generic names carry a `<>` suffix,
            e.g. "MaxLength<>".
        modifiers: name -> fn(schema, *parameters) returning a schema, applied
            left to right over an intersection chain.
        existing_interfaces: name -> schema of declarations already resolved in
            the current batch.
    """

    types: Mapping[str, TypeFactory] = field(default_factory=dict)
    modifiers: Mapping[str, Modifier] = field(default_factory=dict)
    existing_interfaces: Mapping[str, Schema] = field(default_factory=dict)

    def __post_init__(self):
        # Snapshot caller dicts so later mutation on their side is not observed
        object.__setattr__(self, "types", MappingProxyType(dict(self.types)))
        object.__setattr__(self, "modifiers", MappingProxyType(dict(self.modifiers)))
        object.__setattr__(self, "existing_interfaces", MappingProxyType(dict(self.existing_interfaces)))

    def get_type(self, name: str) -> TypeFactory | None:
        return self.types.get(name)

    def get_modifier(self, name: str) -> Modifier | None:
        return self.modifiers.get(name)

    def get_interface(self, name: str) -> Schema | None:
        return self.existing_interfaces.get(name)

    def with_interface(self, name: str, schema: Schema) -> "ResolverRegistry":
        """Return a registry that also knows `name`; an existing entry is never replaced."""
        if name in self.existing_interfaces:
            return self
        return replace(self, existing_interfaces={**self.existing_interfaces, name: schema})

    def with_types(self, types: Mapping[str, TypeFactory]) -> "ResolverRegistry":
        return replace(self, types={**self.types, **types})

    def with_modifiers(self, modifiers: Mapping[str, Modifier]) -> "ResolverRegistry":
        return replace(self, modifiers={**self.modifiers, **modifiers})


EMPTY_REGISTRY = ResolverRegistry()
