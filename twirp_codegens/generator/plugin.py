"""protoc plugin entry: CodeGeneratorRequest in, CodeGeneratorResponse out.

See https://protobuf.dev/reference/other/.
"""

from typing import BinaryIO

from google.protobuf.compiler import plugin_pb2

from .driver import run
from .emitter import DecoratorKind
from .loader import dump_response, load_request


def run_plugin(kind: DecoratorKind, stdin: BinaryIO, stdout: BinaryIO) -> int:
    """Run one plugin invocation; returns the process exit code."""
    request = plugin_pb2.CodeGeneratorRequest.FromString(stdin.read())
    response = run(load_request(request), kind)
    stdout.write(dump_response(response).SerializeToString(deterministic=True))
    stdout.flush()
    return 1 if response.error is not None else 0
