import sys
import structlog
from ripedb.config import Config, load_config


def test_config_defaults(monkeypatch):
    monkeypatch.delenv("RIPEDB_DEFAULT_SOURCE", raising=False)
    config = Config()
    assert config.log_level == "info"
    assert config.log_file == "STDERR"
    assert config.default_source == "RIPE"


def test_config_env(monkeypatch):
    monkeypatch.setenv("RIPEDB_DEFAULT_SOURCE", "TEST")
    monkeypatch.setenv("RIPEDB_LOG_FORMAT", "json")
    config = Config()
    assert config.default_source == "TEST"
    assert config.log_format == "json"


def test_load_config_overrides():
    config = load_config(log_level="debug", default_source="TEST")
    assert config.log_level == "debug"
    assert config.default_source == "TEST"
    assert structlog.is_configured()


def test_load_config_log_file(tmp_path):
    path = tmp_path / "ripedb.log"
    load_config(log_file=str(path), log_format="json", log_level="debug")
    structlog.get_logger().info("hello", answer=42)
    assert '"answer": 42' in path.read_text()


def test_stderr_logger_follows_stream(monkeypatch, capsys, tmp_path):
    stream = open(tmp_path / "stderr.txt", "w")
    monkeypatch.setattr(sys, "stderr", stream)
    load_config(log_level="info", log_format="json")
    # the stream present at configure time goes away, as under CliRunner
    monkeypatch.undo()
    stream.close()
    structlog.get_logger().warning("still here")
    assert "still here" in capsys.readouterr().err
