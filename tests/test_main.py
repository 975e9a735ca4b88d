"""Tests for the command-line entry point."""

import pytest

from jstat_exporter.config.settings import config_path_from_env, log_level_from_env
from jstat_exporter.main import ExporterApp, build_parser, load_config, main


def _jstat_script(make_script, report_outputs):
    """Stand-in jstat answering each report flag with canned output."""
    body = 'case "$1" in\n'
    for flag, output in report_outputs.items():
        body += f"  {flag}) cat <<'EOF'\n{output}EOF\n  ;;\n"
    body += "esac"
    return make_script(body)


def test_parser_accepts_original_flag_names():
    args = build_parser().parse_args([
        "--web.listen-address", ":9100",
        "--web.telemetry-path", "/jvm",
        "--jstat.path", "/opt/jdk/bin/jstat",
        "--target.pid", "4242",
        "--jstat.timeout", "2",
        "--log-level", "debug",
    ])

    assert args.listen_address == ":9100"
    assert args.telemetry_path == "/jvm"
    assert args.jstat_path == "/opt/jdk/bin/jstat"
    assert args.target_pid == "4242"
    assert args.jstat_timeout == 2.0
    assert args.log_level == "DEBUG"


def test_load_config_from_flags(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("JSTAT_EXPORTER_CONFIG", raising=False)
    args = build_parser().parse_args(["--target.pid", "4242", "--jstat.path", "/x/jstat"])

    config = load_config(args)

    assert config.target.pid == "4242"
    assert config.jstat.path == "/x/jstat"
    assert config.web.listen_address == ":9010"
    assert config.logging.level == "INFO"


def test_once_prints_metrics(make_script, report_outputs, capsys, monkeypatch):
    """--once scrapes a stand-in jstat and prints the exposition."""
    monkeypatch.delenv("JSTAT_EXPORTER_CONFIG", raising=False)
    path = _jstat_script(make_script, report_outputs)

    with pytest.raises(SystemExit) as exc_info:
        main(["--jstat.path", path, "--target.pid", "4242", "--once", "--log-level", "ERROR"])

    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert "jstat_newMax 19648.0" in out
    assert "jstat_oldUsed 21577.1" in out
    assert "jstat_edenUsed 2315.6" in out


def test_once_with_missing_tool_still_succeeds(tmp_path, capsys, monkeypatch):
    """Failed reports are served as stale values, not as an error."""
    monkeypatch.delenv("JSTAT_EXPORTER_CONFIG", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        main(["--jstat.path", str(tmp_path / "nope"), "--once", "--log-level", "ERROR"])

    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    assert "jstat_oldUsed 0.0" in out
    assert 'jstat_report_up{report="gcold"} 0.0' in out


def test_invalid_flag_value_exits(monkeypatch):
    monkeypatch.delenv("JSTAT_EXPORTER_CONFIG", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        main(["--target.pid", "not-a-pid", "--once"])

    assert exc_info.value.code == 1


def test_exporter_app_scrape_once(config, logger, fake_sampler):
    app = ExporterApp(config, logger)
    app.collector.sampler = fake_sampler

    assert "jstat_metaUsed 13882.4" in app.scrape_once()


def test_once_stdout_is_only_exposition(make_script, report_outputs, capsys, monkeypatch):
    """At the default level logs go to stderr, leaving stdout parseable."""
    monkeypatch.delenv("JSTAT_EXPORTER_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    path = _jstat_script(make_script, report_outputs)

    with pytest.raises(SystemExit) as exc_info:
        main(["--jstat.path", path, "--target.pid", "4242", "--once"])

    assert exc_info.value.code == 0
    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines
    assert all(line.startswith(("# HELP ", "# TYPE ", "jstat_")) for line in lines)
    assert '"levelname": "INFO"' in captured.err


def test_once_failed_reports_log_to_stderr(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("JSTAT_EXPORTER_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    with pytest.raises(SystemExit):
        main(["--jstat.path", str(tmp_path / "nope"), "--once"])

    captured = capsys.readouterr()
    assert '"levelname": "WARNING"' in captured.err
    assert "levelname" not in captured.out


def test_log_level_accepts_critical():
    assert build_parser().parse_args(["--log-level", "critical"]).log_level == "CRITICAL"


def test_config_error_is_logged_as_json(capsys, monkeypatch):
    monkeypatch.delenv("JSTAT_EXPORTER_CONFIG", raising=False)

    with pytest.raises(SystemExit):
        main(["--target.pid", "not-a-pid", "--once"])

    err = capsys.readouterr().err
    assert '"name": "jstat_exporter"' in err
    assert "Failed to load configuration" in err


def test_env_defaults(monkeypatch):
    monkeypatch.setenv("JSTAT_EXPORTER_CONFIG", "/etc/jstat.yaml")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    assert config_path_from_env() == "/etc/jstat.yaml"
    assert log_level_from_env() == "WARNING"
    assert build_parser().parse_args([]).config == "/etc/jstat.yaml"


def test_env_defaults_unset(monkeypatch):
    monkeypatch.delenv("JSTAT_EXPORTER_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    assert config_path_from_env() is None
    assert log_level_from_env() == "INFO"
