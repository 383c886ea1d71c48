"""Conversion of protoc descriptor messages into generator types."""

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from .types import (
    FieldDescriptor,
    FileDescriptor,
    GenerationRequest,
    GenerationResponse,
    MessageDescriptor,
    MethodDescriptor,
    ServiceDescriptor,
)

_FieldProto = descriptor_pb2.FieldDescriptorProto

SCALAR_TYPES: dict[int, str] = {
    _FieldProto.TYPE_DOUBLE: "double",
    _FieldProto.TYPE_FLOAT: "float",
    _FieldProto.TYPE_INT64: "int64",
    _FieldProto.TYPE_UINT64: "uint64",
    _FieldProto.TYPE_INT32: "int32",
    _FieldProto.TYPE_FIXED64: "fixed64",
    _FieldProto.TYPE_FIXED32: "fixed32",
    _FieldProto.TYPE_BOOL: "bool",
    _FieldProto.TYPE_STRING: "string",
    _FieldProto.TYPE_BYTES: "bytes",
    _FieldProto.TYPE_UINT32: "uint32",
    _FieldProto.TYPE_SFIXED32: "sfixed32",
    _FieldProto.TYPE_SFIXED64: "sfixed64",
    _FieldProto.TYPE_SINT32: "sint32",
    _FieldProto.TYPE_SINT64: "sint64",
}

# Field numbers of FileDescriptorProto / DescriptorProto / ServiceDescriptorProto
# used in SourceCodeInfo paths.
_FILE_PACKAGE = 2
_FILE_MESSAGE = 4
_FILE_SERVICE = 6
_MESSAGE_FIELD = 2
_MESSAGE_NESTED = 3
_SERVICE_METHOD = 2

Comments = dict[tuple[int, ...], str]


def _comments(proto: descriptor_pb2.FileDescriptorProto) -> Comments:
    return {
        tuple(location.path): location.leading_comments
        for location in proto.source_code_info.location
        if location.leading_comments
    }


def _field(proto: descriptor_pb2.FieldDescriptorProto, comment: str | None) -> FieldDescriptor:
    return FieldDescriptor(
        name=proto.name,
        type=proto.type_name if proto.type_name else SCALAR_TYPES.get(proto.type, "unknown"),
        number=proto.number,
        repeated=proto.label == _FieldProto.LABEL_REPEATED,
        comment=comment,
    )


def _message(proto: descriptor_pb2.DescriptorProto, path: tuple[int, ...], comments: Comments) -> MessageDescriptor:
    return MessageDescriptor(
        name=proto.name,
        fields=[
            _field(f, comments.get((*path, _MESSAGE_FIELD, i)))
            for i, f in enumerate(proto.field)
        ],
        nested=[
            _message(n, (*path, _MESSAGE_NESTED, i), comments)
            for i, n in enumerate(proto.nested_type)
        ],
        comment=comments.get(path),
    )


def _service(proto: descriptor_pb2.ServiceDescriptorProto, path: tuple[int, ...], comments: Comments) -> ServiceDescriptor:
    return ServiceDescriptor(
        name=proto.name,
        methods=[
            MethodDescriptor(
                name=m.name,
                input_type=m.input_type,
                output_type=m.output_type,
                comment=comments.get((*path, _SERVICE_METHOD, i)),
            )
            for i, m in enumerate(proto.method)
        ],
        comment=comments.get(path),
    )


def load_file(proto: descriptor_pb2.FileDescriptorProto) -> FileDescriptor:
    """Convert a FileDescriptorProto, keeping leading comments when present."""
    comments = _comments(proto)
    return FileDescriptor(
        name=proto.name,
        package=proto.package,
        messages=[
            _message(m, (_FILE_MESSAGE, i), comments) for i, m in enumerate(proto.message_type)
        ],
        services=[
            _service(s, (_FILE_SERVICE, i), comments) for i, s in enumerate(proto.service)
        ],
        dependencies=list(proto.dependency),
        comment=comments.get((_FILE_PACKAGE,)),
    )


def load_request(request: plugin_pb2.CodeGeneratorRequest) -> GenerationRequest:
    """Convert a CodeGeneratorRequest."""
    return GenerationRequest(
        files=[load_file(f) for f in request.proto_file],
        files_to_generate=list(request.file_to_generate),
        parameter=request.parameter,
    )


def load_descriptor_set(data: bytes) -> list[FileDescriptor]:
    """Load a serialized FileDescriptorSet as written by ``protoc --descriptor_set_out``."""
    descriptor_set = descriptor_pb2.FileDescriptorSet.FromString(data)
    return [load_file(f) for f in descriptor_set.file]


def dump_response(response: GenerationResponse) -> plugin_pb2.CodeGeneratorResponse:
    """Convert a GenerationResponse back to a CodeGeneratorResponse."""
    result = plugin_pb2.CodeGeneratorResponse(
        supported_features=plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL,
    )
    if response.error is not None:
        result.error = response.error
        return result
    for f in response.files:
        result.file.add(name=f.name, content=f.content)
    return result
