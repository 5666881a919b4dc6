"""Request builder — turns caller intent into a RedactContentRequest.

Usage:
    from dlp_redact.builder import build_text_request

    request = build_text_request(
        "call me at 555-1234",
        info_types=["PHONE_NUMBER"],
        replacement="[hidden]",
    )
    request.replace_configs
    # (ReplaceConfig(replace_with='[hidden]', info_type=InfoType(name='PHONE_NUMBER')),)

Everything here is a pure transformation except ``read_content_item``.
"""

from __future__ import annotations
import mimetypes
from pathlib import Path
from typing import Iterable

from .types import (
    ContentItem,
    ImageRedactionConfig,
    InfoType,
    InspectConfig,
    Likelihood,
    RedactContentRequest,
    RedactionColor,
    ReplaceConfig,
)

DEFAULT_REPLACEMENT = "_REDACTED_"
DEFAULT_MIME_TYPE = "application/octet-stream"


def to_info_types(names: Iterable[str | InfoType]) -> tuple[InfoType, ...]:
    """Normalize names to InfoTypes, dropping repeats (first one wins)."""
    seen: dict[str, InfoType] = {}
    for name in names:
        info_type = name if isinstance(name, InfoType) else InfoType(name)
        seen.setdefault(info_type.name, info_type)
    return tuple(seen.values())


def build_inspect_config(
    info_types: Iterable[str | InfoType] = (),
    min_likelihood: Likelihood = Likelihood.LIKELIHOOD_UNSPECIFIED,
) -> InspectConfig:
    return InspectConfig(info_types=to_info_types(info_types), min_likelihood=min_likelihood)


def build_replace_configs(
    info_types: Iterable[str | InfoType] = (),
    replacement: str = DEFAULT_REPLACEMENT,
) -> tuple[ReplaceConfig, ...]:
    """One rule per info type, or a single catch-all rule when none are given."""
    types = to_info_types(info_types)
    if not types:
        return (ReplaceConfig(replace_with=replacement),)
    return tuple(ReplaceConfig(replace_with=replacement, info_type=t) for t in types)


def build_image_redaction_configs(
    info_types: Iterable[str | InfoType] = (),
    color: RedactionColor | None = None,
) -> tuple[ImageRedactionConfig, ...]:
    """One rule per info type.  Regions are cleared unless a colour is given."""
    return tuple(
        ImageRedactionConfig(info_type=t, redaction_color=color)
        for t in to_info_types(info_types)
    )


def build_text_request(
    text: str,
    *,
    info_types: Iterable[str | InfoType] = (),
    replacement: str = DEFAULT_REPLACEMENT,
    min_likelihood: Likelihood = Likelihood.LIKELIHOOD_UNSPECIFIED,
) -> RedactContentRequest:
    types = to_info_types(info_types)
    return RedactContentRequest(
        inspect_config=build_inspect_config(types, min_likelihood),
        items=(ContentItem.from_text(text),),
        replace_configs=build_replace_configs(types, replacement),
    )


def build_image_request(
    item: ContentItem,
    *,
    info_types: Iterable[str | InfoType] = (),
    min_likelihood: Likelihood = Likelihood.LIKELIHOOD_UNSPECIFIED,
    color: RedactionColor | None = None,
) -> RedactContentRequest:
    types = to_info_types(info_types)
    return RedactContentRequest(
        inspect_config=build_inspect_config(types, min_likelihood),
        items=(item,),
        image_redaction_configs=build_image_redaction_configs(types, color),
    )


def guess_mime_type(path: str | Path) -> str:
    """Guess a MIME type from the file name, e.g. ``photo.png`` → ``image/png``."""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type or DEFAULT_MIME_TYPE


def read_content_item(path: str | Path) -> ContentItem:
    """Read a local file into a ContentItem.  OSError propagates."""
    path = Path(path)
    return ContentItem(mime_type=guess_mime_type(path), data=path.read_bytes())
