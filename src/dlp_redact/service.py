"""Remote call — the narrow interface to the redaction service and its
Google Cloud DLP implementation.

Usage:
    from dlp_redact.service import DlpService

    with DlpService(project="my-project") as service:
        response = service.redact_content(request)

Tests substitute any object with ``redact_content`` and ``close``.

Text items with replace rules go through ``deidentify_content``; everything
else goes through ``redact_image``.  One RPC per item, no retries.  Errors
from the client library propagate unchanged.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Protocol

from google.cloud import dlp_v2

from .errors import ConfigError
from .types import (
    ContentItem,
    ImageRedactionConfig,
    InspectConfig,
    RedactContentRequest,
    RedactContentResponse,
    ReplaceConfig,
)

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = "global"

# MIME type → ByteContentItem.BytesType name
_BYTES_TYPES = {
    "image/jpeg": "IMAGE_JPEG",
    "image/bmp": "IMAGE_BMP",
    "image/png": "IMAGE_PNG",
    "image/svg+xml": "IMAGE_SVG",
    "text/plain": "TEXT_UTF8",
}


class RedactionService(Protocol):
    """Anything that can redact a request in one blocking call."""

    def redact_content(self, request: RedactContentRequest) -> RedactContentResponse:
        ...

    def close(self) -> None:
        ...


# ----------------------------------------------------------------------
# Request marshaling
# ----------------------------------------------------------------------

def bytes_type_for(mime_type: str) -> dlp_v2.ByteContentItem.BytesType:
    name = _BYTES_TYPES.get(mime_type)
    if name is None:
        name = "IMAGE" if mime_type.startswith("image/") else "BYTES_TYPE_UNSPECIFIED"
    return dlp_v2.ByteContentItem.BytesType[name]


def inspect_config_to_dlp(config: InspectConfig) -> dict[str, Any]:
    return {
        "info_types": [{"name": t.name} for t in config.info_types],
        "min_likelihood": dlp_v2.Likelihood[config.min_likelihood.name],
    }


def replace_configs_to_dlp(configs: tuple[ReplaceConfig, ...]) -> dict[str, Any]:
    """Build a deidentify config with one transformation per rule.

    A catch-all rule becomes a transformation with no info types, which the
    service applies to every finding.
    """
    transformations = []
    for rc in configs:
        transformation: dict[str, Any] = {
            "primitive_transformation": {
                "replace_config": {"new_value": {"string_value": rc.replace_with}},
            },
        }
        if rc.info_type is not None:
            transformation["info_types"] = [{"name": rc.info_type.name}]
        transformations.append(transformation)
    return {"info_type_transformations": {"transformations": transformations}}


def image_redaction_configs_to_dlp(
    configs: tuple[ImageRedactionConfig, ...],
) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for ic in configs:
        entry: dict[str, Any] = {"info_type": {"name": ic.info_type.name}}
        if ic.redaction_color is not None:
            color = ic.redaction_color
            entry["redaction_color"] = {
                "red": color.red,
                "green": color.green,
                "blue": color.blue,
            }
        out.append(entry)
    return out


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------

class DlpService:
    """RedactionService backed by ``google.cloud.dlp_v2``."""

    def __init__(
        self,
        project: str | None = None,
        *,
        location: str = DEFAULT_LOCATION,
        client: dlp_v2.DlpServiceClient | None = None,
    ) -> None:
        self._project = project
        self._location = location
        self._client = client

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _get_client(self) -> dlp_v2.DlpServiceClient:
        """Lazy-init the client so argument errors never open a channel."""
        if self._client is None:
            self._client = dlp_v2.DlpServiceClient()
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.transport.close()
            self._client = None

    def __enter__(self) -> DlpService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    @property
    def parent(self) -> str:
        """``projects/{project}/locations/{location}``.

        Falls back to the project of the application default credentials.
        """
        if self._project is None:
            import google.auth
            _, self._project = google.auth.default()
            if not self._project:
                raise ConfigError(
                    "no Google Cloud project configured; pass --project or set GOOGLE_CLOUD_PROJECT"
                )
        return f"projects/{self._project}/locations/{self._location}"

    def redact_content(self, request: RedactContentRequest) -> RedactContentResponse:
        parent = self.parent
        inspect_config = inspect_config_to_dlp(request.inspect_config)

        items: list[ContentItem] = []
        for item in request.items:
            if item.is_text and request.replace_configs:
                items.append(self._deidentify_text(parent, inspect_config, item, request))
            else:
                items.append(self._redact_image(parent, inspect_config, item, request))

        return RedactContentResponse(items=tuple(items))

    def _deidentify_text(
        self,
        parent: str,
        inspect_config: dict[str, Any],
        item: ContentItem,
        request: RedactContentRequest,
    ) -> ContentItem:
        logger.debug(
            "deidentify_content parent=%s info_types=%d rules=%d",
            parent, len(request.inspect_config.info_types), len(request.replace_configs),
        )
        response = self._get_client().deidentify_content(request={
            "parent": parent,
            "inspect_config": inspect_config,
            "deidentify_config": replace_configs_to_dlp(request.replace_configs),
            "item": {"value": item.text()},
        })
        return ContentItem.from_text(response.item.value)

    def _redact_image(
        self,
        parent: str,
        inspect_config: dict[str, Any],
        item: ContentItem,
        request: RedactContentRequest,
    ) -> ContentItem:
        logger.debug(
            "redact_image parent=%s mime_type=%s bytes=%d rules=%d",
            parent, item.mime_type, len(item.data), len(request.image_redaction_configs),
        )
        response = self._get_client().redact_image(request={
            "parent": parent,
            "inspect_config": inspect_config,
            "image_redaction_configs": image_redaction_configs_to_dlp(
                request.image_redaction_configs
            ),
            "byte_item": {"type_": bytes_type_for(item.mime_type), "data": item.data},
        })
        return ContentItem(mime_type=item.mime_type, data=response.redacted_image)
