"""Generation entry point over a decoded compilation request."""

from __future__ import annotations

import logging

from cachegen.config import GeneratorConfig, resolve_config
from cachegen.descriptors import GeneratedFile, GenerationRequest, GenerationResponse
from cachegen.emitter import emit_file
from cachegen.errors import GenerationError
from obs.tracing import set_span_attributes, stage_span

_LOGGER = logging.getLogger(__name__)


def generate(
    request: GenerationRequest,
    config: GeneratorConfig | None = None,
) -> GenerationResponse:
    """Generate cache manager files for every file flagged for generation.

    Files are processed sequentially in request order. The first failure
    aborts the run.

    Parameters
    ----------
    request
        Decoded compilation request.
    config
        Generator configuration. Resolved from the request parameter and the
        environment when omitted.

    Returns
    -------
    GenerationResponse
        One generated file per input file with at least one candidate service.

    Raises
    ------
    GenerationError
        Raised when generating any file fails.
    """
    resolved = config if config is not None else resolve_config(request.parameter)
    generated: list[GeneratedFile] = []
    with stage_span(
        "cachegen.generate",
        stage="generate",
        attributes={"cachegen.file_count": len(request.files)},
    ) as span:
        for file in request.files:
            if not file.generate:
                continue
            with stage_span(
                "cachegen.generate_file",
                stage="generate_file",
                attributes={
                    "cachegen.file": file.path,
                    "cachegen.service_count": len(file.services),
                },
            ):
                try:
                    output = emit_file(file, resolved)
                except Exception as exc:
                    raise GenerationError(file.path, exc) from exc
            if output is None:
                continue
            _LOGGER.info("Generated %s from %s.", output.name, file.path)
            generated.append(output)
        set_span_attributes(span, {"cachegen.generated_count": len(generated)})
    return GenerationResponse(files=tuple(generated))


__all__ = ["generate"]
