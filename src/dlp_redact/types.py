"""Core types — request/response values exchanged with the DLP service."""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum


class Likelihood(IntEnum):
    """Confidence the service must reach before a match counts.

    Ordered, and numbered as the service numbers them.
    """
    LIKELIHOOD_UNSPECIFIED = 0
    VERY_UNLIKELY = 1
    UNLIKELY = 2
    POSSIBLE = 3
    LIKELY = 4
    VERY_LIKELY = 5

    @classmethod
    def parse(cls, name: str) -> Likelihood:
        """Look up a member by name, e.g. ``"possible"`` → POSSIBLE."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ", ".join(m.name for m in cls)
            raise ValueError(f"invalid likelihood {name!r} (choose from {choices})") from None


@dataclass(frozen=True, slots=True)
class InfoType:
    """A category of sensitive data, e.g. EMAIL_ADDRESS."""
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("info type name must not be empty")


@dataclass(frozen=True, slots=True)
class InspectConfig:
    """What the service looks for, and how sure it must be."""
    info_types: tuple[InfoType, ...] = ()
    min_likelihood: Likelihood = Likelihood.LIKELIHOOD_UNSPECIFIED


@dataclass(frozen=True, slots=True)
class ContentItem:
    """A typed payload sent for, or returned from, redaction."""
    mime_type: str         # e.g. "text/plain", "image/png"
    data: bytes

    @classmethod
    def from_text(cls, text: str) -> ContentItem:
        return cls(mime_type="text/plain", data=text.encode("utf-8"))

    @property
    def is_text(self) -> bool:
        return self.mime_type.startswith("text/")

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    def text(self) -> str:
        return self.data.decode("utf-8")


@dataclass(frozen=True, slots=True)
class ReplaceConfig:
    """Replace matches of ``info_type`` (or of anything, when None)."""
    replace_with: str
    info_type: InfoType | None = None

    @property
    def is_catch_all(self) -> bool:
        return self.info_type is None


@dataclass(frozen=True, slots=True)
class RedactionColor:
    """RGB fill colour, each channel in [0, 1]."""
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0.0 <= channel <= 1.0:
                raise ValueError(f"colour channel out of range [0, 1]: {channel}")


@dataclass(frozen=True, slots=True)
class ImageRedactionConfig:
    """Mask matches of ``info_type`` in an image.

    With no colour the matched region is cleared; otherwise it is filled.
    """
    info_type: InfoType
    redaction_color: RedactionColor | None = None

    @property
    def clear_target(self) -> bool:
        return self.redaction_color is None


@dataclass(frozen=True, slots=True)
class RedactContentRequest:
    """Full outbound payload for one redaction call."""
    inspect_config: InspectConfig
    items: tuple[ContentItem, ...]
    replace_configs: tuple[ReplaceConfig, ...] = ()
    image_redaction_configs: tuple[ImageRedactionConfig, ...] = ()


@dataclass(frozen=True, slots=True)
class RedactContentResponse:
    """Redacted items, one per item submitted."""
    items: tuple[ContentItem, ...] = ()
