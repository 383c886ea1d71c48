"""Per-call context carrying structured fields."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Self


@dataclass(frozen=True, slots=True)
class Context:
    """Immutable call context.

    Middleware derives new contexts with with_fields() instead of mutating
    the one it was given, so concurrent calls never observe each other's
    fields.

    Example:
        ctx = Context({"x_forwarded_for": "203.0.113.7"})
        ctx = ctx.with_fields({"twirp_method": "Speak"})
    """

    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def with_fields(self, fields: Mapping[str, Any]) -> Self:
        """Return a new context with ``fields`` layered over the current ones."""
        return type(self)({**self.fields, **fields})

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)
