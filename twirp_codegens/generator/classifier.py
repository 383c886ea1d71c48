"""Classification of sensitive message fields."""

from dataclasses import dataclass

DEFAULT_SENSITIVE_TOKENS: tuple[str, ...] = ("password", "token", "secret", "auth")


@dataclass(frozen=True)
class FieldClassifier:
    """Decides whether a field may appear in logs or analytics payloads.

    A field is sensitive when its name contains any of ``tokens`` as a
    case-sensitive substring. The test is deliberately broad: ``oauth`` and
    ``author`` are both caught by ``auth``.
    """

    tokens: tuple[str, ...] = DEFAULT_SENSITIVE_TOKENS

    def is_sensitive(self, field_name: str) -> bool:
        return any(token in field_name for token in self.tokens)


_DEFAULT = FieldClassifier()


def is_sensitive(field_name: str) -> bool:
    """Check a field name against the default block-list."""
    return _DEFAULT.is_sensitive(field_name)
