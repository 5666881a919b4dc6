"""Output writer — redacted text to a stream, redacted images to a file."""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

from .errors import UnexpectedResponseError
from .types import ContentItem

logger = logging.getLogger(__name__)


def write_text(items: Iterable[ContentItem], stream: TextIO | None = None) -> list[str]:
    """Write each item's payload as a UTF-8 line.  Returns the lines written."""
    stream = stream or sys.stdout
    lines: list[str] = []
    for item in items:
        text = item.text()
        stream.write(text)
        stream.write("\n")
        lines.append(text)
    stream.flush()
    return lines


def write_image(items: Iterable[ContentItem], path: str | Path) -> Path:
    """Write the single returned item's bytes to ``path``, replacing its contents."""
    items = list(items)
    if len(items) != 1:
        raise UnexpectedResponseError(expected=1, received=len(items))

    path = Path(path)
    with open(path, "wb") as f:
        f.write(items[0].data)
    logger.info("wrote %d bytes to %s", len(items[0].data), path)
    return path
