"""The two redaction operations: a literal string, or an image file.

Usage:
    from dlp_redact import DlpService, redact_string

    with DlpService(project="my-project") as service:
        redact_string(service, "call me at 555-1234", info_types=["PHONE_NUMBER"])
    # prints: call me at _REDACTED_
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, TextIO

from .builder import (
    DEFAULT_REPLACEMENT,
    build_image_request,
    build_text_request,
    read_content_item,
)
from .output import write_image, write_text
from .service import RedactionService
from .types import Likelihood, RedactionColor


def redact_string(
    service: RedactionService,
    text: str,
    *,
    replacement: str = DEFAULT_REPLACEMENT,
    min_likelihood: Likelihood = Likelihood.LIKELIHOOD_UNSPECIFIED,
    info_types: Iterable[str] = (),
    stream: TextIO | None = None,
) -> list[str]:
    """Redact ``text`` and print the result.  Returns the printed lines."""
    request = build_text_request(
        text,
        info_types=info_types,
        replacement=replacement,
        min_likelihood=min_likelihood,
    )
    response = service.redact_content(request)
    return write_text(response.items, stream)


def redact_image(
    service: RedactionService,
    path: str | Path,
    output_path: str | Path,
    *,
    min_likelihood: Likelihood = Likelihood.LIKELIHOOD_UNSPECIFIED,
    info_types: Iterable[str] = (),
    color: RedactionColor | None = None,
) -> Path:
    """Redact the image at ``path`` and write the result to ``output_path``."""
    request = build_image_request(
        read_content_item(path),
        info_types=info_types,
        min_likelihood=min_likelihood,
        color=color,
    )
    response = service.redact_content(request)
    return write_image(response.items, output_path)
