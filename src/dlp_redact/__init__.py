"""dlp-redact — redact strings and images with the Cloud DLP service."""

from .builder import (
    DEFAULT_REPLACEMENT,
    build_image_request,
    build_text_request,
)
from .config import RedactSettings, load_config, load_from_yaml, load_settings
from .errors import ConfigError, DlpRedactError, UnexpectedResponseError
from .redact import redact_image, redact_string
from .service import DlpService, RedactionService
from .types import (
    ContentItem,
    ImageRedactionConfig,
    InfoType,
    InspectConfig,
    Likelihood,
    RedactContentRequest,
    RedactContentResponse,
    RedactionColor,
    ReplaceConfig,
)

__all__ = [
    "DEFAULT_REPLACEMENT", "build_text_request", "build_image_request",
    "RedactSettings", "load_config", "load_from_yaml", "load_settings",
    "DlpRedactError", "ConfigError", "UnexpectedResponseError",
    "redact_string", "redact_image",
    "DlpService", "RedactionService",
    "ContentItem", "ImageRedactionConfig", "InfoType", "InspectConfig", "Likelihood",
    "RedactContentRequest", "RedactContentResponse", "RedactionColor", "ReplaceConfig",
]
__version__ = "0.1.0"
