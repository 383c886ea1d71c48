"""Tests for descriptor loading and the protoc plugin entry."""

import io

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from twirp_codegens.generator.emitter import DecoratorKind
from twirp_codegens.generator.loader import dump_response, load_descriptor_set, load_file, load_request
from twirp_codegens.generator.plugin import run_plugin
from twirp_codegens.generator.types import GeneratedFile, GenerationResponse

FieldProto = descriptor_pb2.FieldDescriptorProto


def hello_proto():
    proto = descriptor_pb2.FileDescriptorProto(name="test.proto", package="us.xeserv.api", syntax="proto3")

    words = proto.message_type.add(name="Words")
    words.field.add(name="message", number=1, type=FieldProto.TYPE_STRING, label=FieldProto.LABEL_OPTIONAL)
    words.field.add(name="tags", number=2, type=FieldProto.TYPE_STRING, label=FieldProto.LABEL_REPEATED)
    inner = words.nested_type.add(name="Inner")
    inner.field.add(
        name="parent",
        number=1,
        type=FieldProto.TYPE_MESSAGE,
        type_name=".us.xeserv.api.Words",
        label=FieldProto.LABEL_OPTIONAL,
    )

    service = proto.service.add(name="HelloWorld")
    service.method.add(name="Speak", input_type=".us.xeserv.api.Words", output_type=".us.xeserv.api.Words")

    info = proto.source_code_info
    info.location.add(path=[2], leading_comments=" Greeting API.\n")
    info.location.add(path=[6, 0], leading_comments=" HelloWorld says things.\n")
    info.location.add(path=[6, 0, 2, 0], leading_comments=" Speak says the words back.\n")
    info.location.add(path=[4, 0, 2, 0], leading_comments=" The words.\n")
    info.location.add(path=[4, 0, 3, 0], leading_comments=" Nested.\n")
    return proto


def empty_proto():
    proto = descriptor_pb2.FileDescriptorProto(name="empty.proto", package="empty")
    proto.message_type.add(name="Nothing")
    return proto


def plugin_request(*names, parameter=""):
    return plugin_pb2.CodeGeneratorRequest(
        file_to_generate=list(names),
        parameter=parameter,
        proto_file=[hello_proto(), empty_proto()],
    )


def describe_load_file():
    def copies_package_services_and_methods(expect):
        file = load_file(hello_proto())
        expect(file.name) == "test.proto"
        expect(file.package) == "us.xeserv.api"
        expect(file.services[0].name) == "HelloWorld"
        method = file.services[0].methods[0]
        expect((method.name, method.input_type, method.output_type)) == (
            "Speak",
            ".us.xeserv.api.Words",
            ".us.xeserv.api.Words",
        )

    def maps_field_types(expect):
        words = load_file(hello_proto()).messages[0]
        expect([(f.name, f.type, f.repeated) for f in words.fields]) == [
            ("message", "string", False),
            ("tags", "string", True),
        ]
        expect(words.nested[0].fields[0].type) == ".us.xeserv.api.Words"

    def attaches_leading_comments(expect):
        file = load_file(hello_proto())
        expect(file.services[0].comment) == " HelloWorld says things.\n"
        expect(file.services[0].methods[0].comment) == " Speak says the words back.\n"
        expect(file.messages[0].fields[0].comment) == " The words.\n"
        expect(file.messages[0].nested[0].comment) == " Nested.\n"
        expect(file.messages[0].comment) == None
        expect(file.comment) == " Greeting API.\n"


def describe_load_request():
    def keeps_files_and_names(expect):
        request = load_request(plugin_request("test.proto", parameter="comments=false"))
        expect([f.name for f in request.files]) == ["test.proto", "empty.proto"]
        expect(request.files_to_generate) == ["test.proto"]
        expect(request.parameter) == "comments=false"

    def loads_descriptor_sets(expect):
        descriptor_set = descriptor_pb2.FileDescriptorSet(file=[hello_proto(), empty_proto()])
        files = load_descriptor_set(descriptor_set.SerializeToString())
        expect([f.name for f in files]) == ["test.proto", "empty.proto"]


def describe_dump_response():
    def copies_files(expect):
        response = dump_response(GenerationResponse(files=[GeneratedFile(name="a.py", content="x = 1\n")]))
        expect([(f.name, f.content) for f in response.file]) == [("a.py", "x = 1\n")]
        expect(response.HasField("error")) == False
        expect(response.supported_features) == plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    def copies_errors_without_files(expect):
        response = dump_response(GenerationResponse(files=[], error="bad"))
        expect(response.error) == "bad"
        expect(len(response.file)) == 0


def describe_run_plugin():
    def writes_a_response_to_stdout(expect):
        stdout = io.BytesIO()
        code = run_plugin(
            DecoratorKind.ANALYTICS,
            io.BytesIO(plugin_request("test.proto", "empty.proto").SerializeToString()),
            stdout,
        )

        response = plugin_pb2.CodeGeneratorResponse.FromString(stdout.getvalue())
        expect(code) == 0
        expect([f.name for f in response.file]) == ["test_twirp_analytics.py"]
        expect("# Speak says the words back." in response.file[0].content) == True

    def reports_errors_in_the_response(expect):
        stdout = io.BytesIO()
        code = run_plugin(
            DecoratorKind.LOGGING,
            io.BytesIO(plugin_request("nope.proto").SerializeToString()),
            stdout,
        )

        response = plugin_pb2.CodeGeneratorResponse.FromString(stdout.getvalue())
        expect(code) == 1
        expect("nope.proto" in response.error) == True
        expect(len(response.file)) == 0
