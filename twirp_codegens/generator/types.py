"""Type definitions for descriptors and generation requests."""

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin


@dataclass
class FieldDescriptor(DataClassJsonMixin):
    """Represents a field of a message.

    For message and enum fields ``type`` is the qualified reference as written
    by protoc (``.pkg.Name``); for scalars it is the scalar name.
    """

    name: str
    type: str
    number: int = 0
    repeated: bool = False
    comment: str | None = None


@dataclass
class MessageDescriptor(DataClassJsonMixin):
    """Represents a message type definition."""

    name: str
    fields: list[FieldDescriptor] = field(default_factory=list)
    nested: list["MessageDescriptor"] = field(default_factory=list)
    comment: str | None = None


@dataclass
class MethodDescriptor(DataClassJsonMixin):
    """Represents a single RPC method of a service."""

    name: str
    input_type: str
    output_type: str
    comment: str | None = None


@dataclass
class ServiceDescriptor(DataClassJsonMixin):
    """Represents a service definition."""

    name: str
    methods: list[MethodDescriptor] = field(default_factory=list)
    comment: str | None = None


@dataclass
class FileDescriptor(DataClassJsonMixin):
    """Represents a compilation unit (one .proto file)."""

    name: str
    package: str = ""
    messages: list[MessageDescriptor] = field(default_factory=list)
    services: list[ServiceDescriptor] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    comment: str | None = None


@dataclass
class GenerationRequest(DataClassJsonMixin):
    """Represents one plugin invocation.

    ``files`` holds every file available for reference, ``files_to_generate``
    the names of the ones output is requested for.
    """

    files: list[FileDescriptor]
    files_to_generate: list[str]
    parameter: str = ""


@dataclass
class GeneratedFile(DataClassJsonMixin):
    """Represents one output file."""

    name: str
    content: str


@dataclass
class GenerationResponse(DataClassJsonMixin):
    """Represents the result of a generation request."""

    files: list[GeneratedFile] = field(default_factory=list)
    error: str | None = None


def qualify(package: str, name: str) -> str:
    """Join a package and a name into a qualified name without leading dot."""
    return f"{package}.{name}" if package else name
