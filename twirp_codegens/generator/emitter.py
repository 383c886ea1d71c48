"""Decorator code generation for Twirp services."""

from dataclasses import dataclass
from enum import StrEnum, auto
from importlib import resources

from jinja2 import Environment, PackageLoader

from .classifier import FieldClassifier
from .options import GeneratorOptions
from .registry import Registry, comment_lines, module_name
from .types import FileDescriptor, ServiceDescriptor, qualify
from .util import attribute_access, to_snake_case

VERSION = "v0.1.0"

RUNTIME_FILES = [
    "__init__.py",
    "analytics.py",
    "context.py",
    "logs.py",
]

env = Environment(
    loader=PackageLoader("twirp_codegens.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)


class DecoratorKind(StrEnum):
    """The cross-cutting behavior a decorator adds.

    Analytics wrappers submit one event per call after the delegate returns;
    a failed submit is re-raised and replaces the delegate's result or
    exception. Logging wrappers only observe and never change the outcome.
    """

    # TODO: a failed analytics submit hides the delegate's own exception
    # (kept as __context__ only); raising both together needs product
    # sign-off before the generated code changes.

    ANALYTICS = auto()
    LOGGING = auto()

    @property
    def suffix(self) -> str:
        """Appended to the service name to name the decorator."""
        return self.value.capitalize()

    @property
    def plugin_name(self) -> str:
        return "protoc-gen-twirp_analytics" if self is DecoratorKind.ANALYTICS else "protoc-gen-twirp_ln"

    @property
    def file_suffix(self) -> str:
        return "_twirp_analytics.py" if self is DecoratorKind.ANALYTICS else "_twirp_ln.py"

    @property
    def template(self) -> str:
        return f"{self.value}.py.j2"


@dataclass(frozen=True)
class MethodPlan:
    """One wrapper method of a decorator."""

    name: str
    input_name: str  # qualified
    output_name: str
    input_type: str  # local identifier
    output_type: str
    comments: tuple[str, ...]


@dataclass(frozen=True)
class DecoratorSpec:
    """Everything needed to render the decorator of one service."""

    name: str
    interface: str
    package: str
    factory: str
    methods: tuple[MethodPlan, ...]
    comments: tuple[str, ...]


@dataclass(frozen=True)
class FieldProjection:
    """A function projecting a message onto its loggable fields."""

    function: str
    qualified_name: str
    message_type: str
    entries: tuple[tuple[str, str], ...]  # (key, value expression)


def output_file_name(file_name: str, kind: DecoratorKind) -> str:
    """Name of the generated file: ``foo/bar.proto`` -> ``foo/bar_twirp_ln.py``."""
    base = file_name[: -len(".proto")] if file_name.endswith(".proto") else file_name
    return base + kind.file_suffix


class Emitter:
    """Renders decorators for the services of a file.

    Type references are resolved through ``registry``, which must already be
    built over every file of the request.
    """

    def __init__(
        self,
        registry: Registry,
        classifier: FieldClassifier | None = None,
        options: GeneratorOptions | None = None,
    ) -> None:
        self.registry = registry
        self.options = options or GeneratorOptions()
        self.classifier = classifier or FieldClassifier(tokens=self.options.sensitive)

    def _comments(self, comment: str | None) -> tuple[str, ...]:
        if not self.options.comments:
            return ()
        return tuple(comment_lines(comment))

    def plan(self, file: FileDescriptor, service: ServiceDescriptor, kind: DecoratorKind) -> DecoratorSpec:
        """Plan the decorator of ``service``, resolving every method type."""
        interface = self.registry.definition(qualify(file.package, service.name)).local_name

        methods = tuple(
            MethodPlan(
                name=method.name,
                input_name=method.input_type.lstrip("."),
                output_name=method.output_type.lstrip("."),
                input_type=self.registry.resolve(method.input_type),
                output_type=self.registry.resolve(method.output_type),
                comments=self._comments(method.comment),
            )
            for method in service.methods
        )

        return DecoratorSpec(
            name=interface + kind.suffix,
            interface=interface,
            package=file.package,
            factory=f"new_{to_snake_case(interface)}_{kind.value}",
            methods=methods,
            comments=self._comments(service.comment),
        )

    def projections(self, specs: list[DecoratorSpec]) -> list[FieldProjection]:
        """Plan one projection per message used as a method input or output."""
        result: list[FieldProjection] = []
        seen: set[str] = set()
        taken: set[str] = set()

        for spec in specs:
            for method in spec.methods:
                for name in (method.input_name, method.output_name):
                    if name in seen:
                        continue
                    seen.add(name)

                    definition = self.registry.definition(name)
                    msg = self.registry.message(name)
                    prefix = "_".join(to_snake_case(part) for part in definition.local_name.split("."))
                    function = f"{prefix}_fields"
                    if function in taken:
                        function = f"{definition.alias}_{function}"
                    taken.add(function)

                    entries = tuple(
                        (f"{prefix}_{f.name}", attribute_access("msg", f.name))
                        for f in msg.fields
                        if not self.classifier.is_sensitive(f.name)
                    )
                    result.append(
                        FieldProjection(
                            function=function,
                            qualified_name=name,
                            message_type=definition.identifier,
                            entries=entries,
                        )
                    )
        return result

    def _message_imports(self, specs: list[DecoratorSpec]) -> list[str]:
        lines = {
            self.registry.definition(name).import_line
            for spec in specs
            for method in spec.methods
            for name in (method.input_name, method.output_name)
        }
        return sorted(lines)

    def render(self, file: FileDescriptor, kind: DecoratorKind) -> str:
        """Render the decorators of every service in ``file``."""
        specs = [self.plan(file, service, kind) for service in file.services]

        projections: list[FieldProjection] = []
        if kind is DecoratorKind.LOGGING:
            projections = self.projections(specs)

        imports = self._message_imports(specs)
        if specs:
            interface_module = module_name(file.name, self.options.service_suffix)
            names = ", ".join(spec.interface for spec in specs)
            imports.insert(0, f"from {interface_module} import {names}")

        return env.get_template(kind.template).render(
            plugin=kind.plugin_name,
            version=VERSION,
            source=file.name,
            file_comments=self._comments(file.comment),
            runtime_import=self.options.runtime_import,
            imports=imports,
            specs=specs,
            projections=projections,
            input_projection={p.qualified_name: p.function for p in projections},
            BLANK_LINE="",
        )


def runtime() -> dict[str, str]:
    """Return the runtime package files as a dict of filename -> content."""
    result: dict[str, str] = {}
    for filename in RUNTIME_FILES:
        content = resources.files("twirp_codegens.runtime").joinpath(filename).read_text()
        result[filename] = content
    return result
