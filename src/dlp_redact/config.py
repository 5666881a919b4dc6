"""YAML/dict settings loader for dlp-redact.

Supports loading from a YAML file or a plain dict (for embedding in a
larger tool config).  Command-line flags override anything loaded here.

Example YAML:

    dlp_redact:
      project: my-project
      location: global
      replacement: "[hidden]"
      min_likelihood: POSSIBLE
      info_types:
        - EMAIL_ADDRESS
        - PHONE_NUMBER

The file is taken from ``--config`` or the DLP_REDACT_CONFIG environment
variable.  GOOGLE_CLOUD_PROJECT fills in the project when the file has none.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from .builder import DEFAULT_REPLACEMENT
from .errors import ConfigError
from .service import DEFAULT_LOCATION
from .types import Likelihood

CONFIG_ENV = "DLP_REDACT_CONFIG"
PROJECT_ENV = "GOOGLE_CLOUD_PROJECT"


@dataclass
class RedactSettings:
    """Settings shared by both redaction modes."""
    project: str | None = None        # None = use application default credentials
    location: str = DEFAULT_LOCATION
    replacement: str = DEFAULT_REPLACEMENT
    min_likelihood: Likelihood = Likelihood.LIKELIHOOD_UNSPECIFIED
    info_types: list[str] = field(default_factory=list)

    def merge(self, **overrides: Any) -> RedactSettings:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _string_setting(data: Mapping[str, Any], key: str, default: str | None) -> str | None:
    """A string value, or ``default`` when the key is missing or null."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"setting {key!r} must be a string, got {type(value).__name__}")
    return value


def load_config(data: Mapping[str, Any]) -> RedactSettings:
    """Normalize a settings dict (from YAML or inline)."""
    # Support nested under "dlp_redact" key or flat
    if "dlp_redact" in data:
        data = data["dlp_redact"] or {}
    if not isinstance(data, Mapping):
        raise ConfigError("the dlp_redact settings section must be a mapping")

    try:
        min_likelihood = Likelihood.parse(
            str(data.get("min_likelihood") or Likelihood.LIKELIHOOD_UNSPECIFIED.name)
        )
    except ValueError as e:
        raise ConfigError(str(e)) from None

    info_types = data.get("info_types") or []
    if isinstance(info_types, str):
        info_types = [info_types]
    if not isinstance(info_types, list) or not all(isinstance(t, str) and t for t in info_types):
        raise ConfigError("setting 'info_types' must be a list of non-empty names")

    return RedactSettings(
        project=_string_setting(data, "project", None),
        location=_string_setting(data, "location", DEFAULT_LOCATION),
        replacement=_string_setting(data, "replacement", DEFAULT_REPLACEMENT),
        min_likelihood=min_likelihood,
        info_types=list(info_types),
    )


def load_from_yaml(path: str | Path) -> RedactSettings:
    """Load settings from a YAML file."""
    import yaml  # optional dependency
    try:
        with open(Path(path).expanduser()) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping")
    return load_config(data)


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> RedactSettings:
    """Defaults, then the YAML file (if any), then environment variables."""
    environ = os.environ if environ is None else environ
    path = path or environ.get(CONFIG_ENV)

    settings = load_from_yaml(path) if path else RedactSettings()
    if settings.project is None and environ.get(PROJECT_ENV):
        settings = settings.merge(project=environ[PROJECT_ENV])
    return settings
