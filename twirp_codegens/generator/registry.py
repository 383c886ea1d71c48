"""Index of every message and service known to a generation request."""

import logging
from dataclasses import dataclass

from .errors import DuplicateDefinitionError, UnresolvedTypeError
from .types import FileDescriptor, MessageDescriptor, ServiceDescriptor, qualify
from .util import to_camel_case

log = logging.getLogger(__name__)


def module_name(file_name: str, suffix: str = "_pb2") -> str:
    """Python module generated for a .proto file.

    ``foo/bar-baz.proto`` becomes ``foo.bar_baz_pb2``.
    """
    base = file_name[: -len(".proto")] if file_name.endswith(".proto") else file_name
    return base.replace("-", "_").replace("/", ".") + suffix


def module_alias(module: str) -> str:
    """Import alias for a module, unique per module name.

    Underscores are doubled before dots are replaced so that ``a.b`` and
    ``a_dot_b`` cannot collide.
    """
    return module.replace("_", "__").replace(".", "_dot_")


@dataclass(frozen=True)
class Definition:
    """A registered message or service."""

    qualified_name: str
    file_name: str
    local_name: str  # Outer.Inner for nested messages
    module: str
    alias: str
    comment: str | None
    message: MessageDescriptor | None = None
    service: ServiceDescriptor | None = None

    @property
    def identifier(self) -> str:
        return f"{self.alias}.{self.local_name}"

    @property
    def import_line(self) -> str:
        return f"import {self.module} as {self.alias}"


def _normalize(name: str) -> str:
    return name[1:] if name.startswith(".") else name


def comment_lines(comment: str | None) -> list[str]:
    """Split a leading comment into lines, dropping one leading space each."""
    if not comment:
        return []
    text = comment.rstrip("\n")
    return [line[1:] if line.startswith(" ") else line for line in text.split("\n")]


class Registry:
    """Maps qualified names to local identifiers for generated source.

    Built once per request over every file in it, before any emission, so a
    service may reference messages of files listed after its own.
    """

    def __init__(self, module_suffix: str = "_pb2", service_suffix: str = "_twirp") -> None:
        self.module_suffix = module_suffix
        self.service_suffix = service_suffix
        self._definitions: dict[str, Definition] = {}

    def build(self, files: list[FileDescriptor]) -> None:
        """Register every message and service of ``files``."""
        for f in files:
            module = module_name(f.name, self.module_suffix)
            alias = module_alias(module)
            for msg in f.messages:
                self._add_message(f, module, alias, f.package, "", msg)

            service_module = module_name(f.name, self.service_suffix)
            for service in f.services:
                self._add(
                    Definition(
                        qualified_name=qualify(f.package, service.name),
                        file_name=f.name,
                        local_name=to_camel_case(service.name),
                        module=service_module,
                        alias=module_alias(service_module),
                        comment=service.comment,
                        service=service,
                    )
                )

        log.debug("registered %d definitions from %d files", len(self._definitions), len(files))

    def _add_message(
        self,
        f: FileDescriptor,
        module: str,
        alias: str,
        parent: str,
        parent_local: str,
        msg: MessageDescriptor,
    ) -> None:
        qualified = qualify(parent, msg.name)
        local = f"{parent_local}.{msg.name}" if parent_local else msg.name
        self._add(
            Definition(
                qualified_name=qualified,
                file_name=f.name,
                local_name=local,
                module=module,
                alias=alias,
                comment=msg.comment,
                message=msg,
            )
        )
        for nested in msg.nested:
            self._add_message(f, module, alias, qualified, local, nested)

    def _add(self, definition: Definition) -> None:
        existing = self._definitions.get(definition.qualified_name)
        if existing is not None:
            raise DuplicateDefinitionError(
                f"{definition.qualified_name} is defined in both "
                f"{existing.file_name} and {definition.file_name}"
            )
        self._definitions[definition.qualified_name] = definition

    def __contains__(self, name: str) -> bool:
        return _normalize(name) in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def definition(self, name: str) -> Definition:
        """Look up a definition; raises UnresolvedTypeError if unknown."""
        try:
            return self._definitions[_normalize(name)]
        except KeyError:
            raise UnresolvedTypeError(name) from None

    def resolve(self, name: str) -> str:
        """Return the local identifier for a qualified type name."""
        return self.definition(name).identifier

    def message(self, name: str) -> MessageDescriptor:
        """Return the message registered under ``name``."""
        msg = self.definition(name).message
        if msg is None:
            raise UnresolvedTypeError(name)
        return msg

    def comments(self, name: str) -> list[str]:
        """Return the leading comment lines attached to a definition."""
        return comment_lines(self.definition(name).comment)
