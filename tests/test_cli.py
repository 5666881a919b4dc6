"""Tests for the command-line interface, with the remote service stubbed out."""

import logging

import pytest
from google.api_core.exceptions import PermissionDenied

from dlp_redact.cli import main, parse_args
from dlp_redact.errors import ConfigError
from dlp_redact.types import ContentItem, ImageRedactionConfig, InfoType, Likelihood, ReplaceConfig

PNG_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A, 0x00, 0x01, 0x02])


def _factory(service, calls=None):
    def factory(settings):
        if calls is not None:
            calls.append(settings)
        return service
    return factory


# ── Usage errors ─────────────────────────────────────────────────────

def test_neither_mode_is_rejected(stub_service, capsys):
    calls = []
    with pytest.raises(SystemExit) as exc:
        main(["-infoTypes", "EMAIL_ADDRESS"], service_factory=_factory(stub_service(), calls))
    assert exc.value.code == 2
    assert calls == []
    assert "-s/--string" in capsys.readouterr().err


def test_both_modes_are_rejected(stub_service, tmp_path):
    calls = []
    with pytest.raises(SystemExit) as exc:
        main(
            ["-s", "hello", "-f", str(tmp_path / "a.png"), "-o", str(tmp_path / "b.png")],
            service_factory=_factory(stub_service(), calls),
        )
    assert exc.value.code == 2
    assert calls == []


def test_unknown_flag_is_rejected(stub_service):
    calls = []
    with pytest.raises(SystemExit) as exc:
        main(["-s", "hello", "-x", "1"], service_factory=_factory(stub_service(), calls))
    assert exc.value.code == 2
    assert calls == []


def test_invalid_likelihood_is_rejected(stub_service, capsys):
    calls = []
    with pytest.raises(SystemExit) as exc:
        main(["-s", "hello", "-minLikelihood", "SORT_OF"], service_factory=_factory(stub_service(), calls))
    assert exc.value.code == 2
    assert calls == []
    assert "invalid likelihood" in capsys.readouterr().err


def test_file_mode_requires_output(stub_service, tmp_path):
    calls = []
    with pytest.raises(SystemExit) as exc:
        main(["-f", str(tmp_path / "a.png")], service_factory=_factory(stub_service(), calls))
    assert exc.value.code == 2
    assert calls == []


def test_empty_info_type_is_rejected(stub_service, capsys):
    calls = []
    with pytest.raises(SystemExit) as exc:
        main(["-s", "x", "-infoTypes", ""], service_factory=_factory(stub_service(), calls))
    assert exc.value.code == 2
    assert calls == []
    assert "info type name must not be empty" in capsys.readouterr().err


def test_null_replacement_in_settings_keeps_default(stub_service, tmp_path):
    config = tmp_path / "dlp.yaml"
    config.write_text("replacement: ~\nlocation: ~\n")
    service = stub_service([ContentItem.from_text("ok")])
    calls = []
    main(["--config", str(config), "-s", "a@b.com"], service_factory=_factory(service, calls))

    (request,) = service.requests
    assert request.replace_configs == (ReplaceConfig(replace_with="_REDACTED_"),)
    assert calls[0].location == "global"


def test_malformed_settings_section_is_a_usage_error(stub_service, tmp_path):
    config = tmp_path / "dlp.yaml"
    config.write_text("dlp_redact: [EMAIL_ADDRESS]\n")
    calls = []
    with pytest.raises(SystemExit) as exc:
        main(["--config", str(config), "-s", "x"], service_factory=_factory(stub_service(), calls))
    assert exc.value.code == 2
    assert calls == []


def test_config_error_is_a_usage_error(stub_service, capsys):
    service = stub_service(error=ConfigError("no Google Cloud project configured"))
    with pytest.raises(SystemExit) as exc:
        main(["-s", "hello"], service_factory=_factory(service))
    assert exc.value.code == 2
    assert service.closed
    assert "no Google Cloud project" in capsys.readouterr().err


# ── Argument parsing ─────────────────────────────────────────────────

def test_parse_args_defaults():
    args = parse_args(["-s", "hello"])
    assert args.string == "hello"
    assert args.file is None
    assert args.replacement is None
    assert args.min_likelihood is None
    assert args.info_types is None


def test_parse_args_long_aliases():
    args = parse_args([
        "--file", "in.png", "--output", "out.png",
        "--min-likelihood", "likely", "--info-types", "FACE", "EMAIL_ADDRESS",
    ])
    assert args.file == "in.png"
    assert args.output == "out.png"
    assert args.min_likelihood is Likelihood.LIKELY
    assert args.info_types == ["FACE", "EMAIL_ADDRESS"]


def test_info_types_stop_at_next_flag():
    args = parse_args(["-s", "x", "-infoTypes", "A", "B", "-r", "[y]"])
    assert args.info_types == ["A", "B"]
    assert args.replacement == "[y]"


# ── Redact string ────────────────────────────────────────────────────

def test_redact_string_example(stub_service, capsys):
    service = stub_service([ContentItem.from_text("call me at [hidden]")])
    code = main(
        ["-s", "call me at 555-1234", "-infoTypes", "PHONE_NUMBER", "-r", "[hidden]"],
        service_factory=_factory(service),
    )
    assert code == 0
    assert capsys.readouterr().out == "call me at [hidden]\n"

    (request,) = service.requests
    assert request.replace_configs == (
        ReplaceConfig(replace_with="[hidden]", info_type=InfoType("PHONE_NUMBER")),
    )
    assert request.items[0].text() == "call me at 555-1234"
    assert service.closed


def test_redact_string_defaults(stub_service):
    service = stub_service([ContentItem.from_text("mail _REDACTED_")])
    main(["-s", "mail a@b.com"], service_factory=_factory(service))

    (request,) = service.requests
    assert request.replace_configs == (ReplaceConfig(replace_with="_REDACTED_"),)
    assert request.inspect_config.min_likelihood is Likelihood.LIKELIHOOD_UNSPECIFIED
    assert request.inspect_config.info_types == ()


def test_remote_error_propagates_and_closes(stub_service):
    service = stub_service(error=PermissionDenied("DLP API has not been enabled"))
    with pytest.raises(PermissionDenied):
        main(["-s", "hello"], service_factory=_factory(service))
    assert service.closed


# ── Redact file ──────────────────────────────────────────────────────

def test_redact_file_example(stub_service, tmp_path):
    src = tmp_path / "photo.png"
    src.write_bytes(b"original image")
    dest = tmp_path / "out.png"
    dest.write_bytes(b"stale output from an earlier run, longer than the new one")
    service = stub_service([ContentItem("image/png", PNG_BYTES)])

    code = main(
        ["-f", str(src), "-o", str(dest), "-infoTypes", "FACE"],
        service_factory=_factory(service),
    )

    assert code == 0
    assert dest.read_bytes() == PNG_BYTES
    (request,) = service.requests
    assert request.image_redaction_configs == (ImageRedactionConfig(InfoType("FACE")),)
    assert request.image_redaction_configs[0].clear_target
    assert request.items[0].mime_type == "image/png"
    assert request.replace_configs == ()
    assert service.closed


def test_redact_missing_file_propagates(stub_service, tmp_path):
    service = stub_service([ContentItem("image/png", PNG_BYTES)])
    with pytest.raises(FileNotFoundError):
        main(
            ["-f", str(tmp_path / "missing.png"), "-o", str(tmp_path / "out.png")],
            service_factory=_factory(service),
        )
    assert service.requests == []
    assert service.closed


# ── Settings ─────────────────────────────────────────────────────────

def test_settings_file_supplies_defaults(stub_service, tmp_path):
    config = tmp_path / "dlp.yaml"
    config.write_text(
        "dlp_redact:\n"
        "  project: from-file\n"
        "  replacement: '[x]'\n"
        "  min_likelihood: LIKELY\n"
        "  info_types: [EMAIL_ADDRESS]\n"
    )
    service = stub_service([ContentItem.from_text("ok")])
    calls = []
    main(["--config", str(config), "-s", "a@b.com"], service_factory=_factory(service, calls))

    (request,) = service.requests
    assert request.replace_configs == (
        ReplaceConfig(replace_with="[x]", info_type=InfoType("EMAIL_ADDRESS")),
    )
    assert request.inspect_config.min_likelihood is Likelihood.LIKELY
    assert calls[0].project == "from-file"


def test_flags_override_settings_file(stub_service, tmp_path):
    config = tmp_path / "dlp.yaml"
    config.write_text("replacement: '[x]'\ninfo_types: [EMAIL_ADDRESS]\n")
    service = stub_service([ContentItem.from_text("ok")])
    calls = []
    main(
        ["--config", str(config), "--project", "from-flag", "-s", "a", "-r", "[y]", "-infoTypes"],
        service_factory=_factory(service, calls),
    )

    (request,) = service.requests
    # an explicit empty -infoTypes list means "all"
    assert request.replace_configs == (ReplaceConfig(replace_with="[y]"),)
    assert calls[0].project == "from-flag"


def test_project_from_environment(stub_service, monkeypatch):
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "from-env")
    calls = []
    main(["-s", "a"], service_factory=_factory(stub_service([ContentItem.from_text("a")]), calls))
    assert calls[0].project == "from-env"


# ── Logging ──────────────────────────────────────────────────────────

def test_quiet_by_default(stub_service, caplog):
    main(["-s", "a"], service_factory=_factory(stub_service([ContentItem.from_text("a")])))
    assert not [r for r in caplog.records if r.name.startswith("dlp_redact")]
    assert logging.getLogger("dlp_redact").level == logging.WARNING


def test_verbose_logs_info(stub_service, caplog):
    main(["-v", "-s", "a"], service_factory=_factory(stub_service([ContentItem.from_text("a")])))
    messages = [r.getMessage() for r in caplog.records if r.name == "dlp_redact.cli"]
    assert any(m.startswith("redacting string") for m in messages)
    assert logging.getLogger("dlp_redact").level == logging.INFO


def test_very_verbose_logs_debug(stub_service):
    main(["-vv", "-s", "a"], service_factory=_factory(stub_service([ContentItem.from_text("a")])))
    assert logging.getLogger("dlp_redact").level == logging.DEBUG
