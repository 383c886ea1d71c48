"""Plugin options parsed from the protoc parameter string."""

from dataclasses import dataclass, fields

from dataclasses_json import DataClassJsonMixin

from .classifier import DEFAULT_SENSITIVE_TOKENS
from .errors import OptionsError

_TRUE = frozenset(["1", "true", "yes", "on"])
_FALSE = frozenset(["0", "false", "no", "off"])


@dataclass(frozen=True)
class GeneratorOptions(DataClassJsonMixin):
    """Options controlling generated code.

    Passed to protoc as ``--twirp_analytics_opt=key=value,key=value``.
    """

    runtime_import: str = "twirp_codegens.runtime"
    module_suffix: str = "_pb2"
    service_suffix: str = "_twirp"
    comments: bool = True
    sensitive: tuple[str, ...] = DEFAULT_SENSITIVE_TOKENS


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise OptionsError(f"option {key} expects a boolean, got {value!r}")


def parse_parameter(parameter: str) -> GeneratorOptions:
    """Parse a ``key=value,key=value`` parameter string."""
    known = {f.name for f in fields(GeneratorOptions)}
    values: dict[str, object] = {}

    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, sep, value = item.partition("=")
        key = key.strip()
        value = value.strip()
        if not sep:
            raise OptionsError(f"option {key} has no value")
        if key not in known:
            raise OptionsError(f"unknown option {key}")

        if key == "comments":
            values[key] = _parse_bool(key, value)
        elif key == "sensitive":
            tokens = tuple(t for t in value.split(":") if t)
            if not tokens:
                raise OptionsError("option sensitive needs at least one token")
            values[key] = tokens
        else:
            if not value:
                raise OptionsError(f"option {key} has no value")
            values[key] = value

    return GeneratorOptions(**values)  # type: ignore[arg-type]
