"""Name conversion helpers."""

import keyword
import re

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def to_camel_case(name: str) -> str:
    """Convert a snake_case (or already CamelCase) name to CamelCase.

    Follows protoc's rules: underscores are dropped and the following letter
    is upper-cased, as is the first letter. A leading underscore becomes "X".
    """
    if not name:
        return name
    out: list[str] = []
    i = 0
    if name[0] == "_":
        out.append("X")
        i = 1
    upper_next = True
    while i < len(name):
        c = name[i]
        i += 1
        if c == "_" and i < len(name) and name[i].islower():
            upper_next = True
            continue
        if upper_next and c.islower():
            c = c.upper()
        upper_next = c.isdigit()
        out.append(c)
    return "".join(out)


def to_snake_case(name: str) -> str:
    """Convert a CamelCase name to snake_case."""
    return _WORD_BOUNDARY.sub("_", name).lower()


def attribute_access(target: str, name: str) -> str:
    """Return source text reading attribute ``name`` from ``target``.

    Keywords cannot be written as plain attributes, protobuf exposes them
    through getattr only.
    """
    if keyword.iskeyword(name):
        return f'getattr({target}, "{name}")'
    return f"{target}.{name}"
