"""End-to-end handling of one generation request."""

import logging

from .classifier import FieldClassifier
from .emitter import DecoratorKind, Emitter, output_file_name
from .errors import GenerationError, UnknownFileError
from .options import parse_parameter
from .registry import Registry
from .types import GeneratedFile, GenerationRequest, GenerationResponse

log = logging.getLogger(__name__)


def generate(request: GenerationRequest, kind: DecoratorKind) -> GenerationResponse:
    """Generate decorators for every requested file that declares a service.

    Files are emitted in the order of ``request.files_to_generate``. Raises
    GenerationError if any file fails; nothing is returned in that case.
    """
    by_name = {f.name: f for f in request.files}
    missing = [name for name in request.files_to_generate if name not in by_name]
    if missing:
        raise UnknownFileError(f"files to generate not found in request: {', '.join(missing)}")

    options = parse_parameter(request.parameter)

    registry = Registry(module_suffix=options.module_suffix, service_suffix=options.service_suffix)
    registry.build(request.files)
    emitter = Emitter(registry, FieldClassifier(tokens=options.sensitive), options)

    generated: list[GeneratedFile] = []
    for name in request.files_to_generate:
        file = by_name[name]
        if not file.services:
            log.debug("skipping %s: no services", name)
            continue
        log.debug("generating %s decorators for %s", kind, name)
        generated.append(GeneratedFile(name=output_file_name(name, kind), content=emitter.render(file, kind)))

    return GenerationResponse(files=generated)


def run(request: GenerationRequest, kind: DecoratorKind) -> GenerationResponse:
    """Like generate(), but report failures in the response instead of raising."""
    try:
        return generate(request, kind)
    except GenerationError as exc:
        log.error("generation failed: %s", exc)
        return GenerationResponse(files=[], error=str(exc))
