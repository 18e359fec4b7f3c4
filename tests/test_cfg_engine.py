"""
Tests for messagekit.utils.cfg.engine
"""
import os
from configparser import ConfigParser

import pytest

from messagekit.utils.cfg import engine
from messagekit.utils.cfg.schema import Config


def test_first_run_writes_template_with_defaults(tmp_path):
    ini = tmp_path / "config.ini"

    cfg = engine.load(ini, environ={})

    assert cfg == Config()
    cp = ConfigParser()
    cp.read(ini, encoding="utf-8")
    assert cp["target"]["url"] == "https://messages.google.com/web"
    assert cp["timeouts"]["login_ms"] == "300000"
    assert cp["browser"]["headless"] == "False"


def test_ini_overrides_are_cast_to_field_types(tmp_path):
    ini = tmp_path / "config.ini"
    ini.write_text(
        "[browser]\nheadless = true\nviewport_width = 1920\n"
        "[delays]\nbetween_conversations_ms = 250\n"
        "[unknown]\nkey = value\n",
        encoding="utf-8",
    )

    cfg = engine.load(ini, environ={})

    assert cfg.browser.headless is True
    assert cfg.browser.viewport_width == 1920
    assert cfg.delays.between_conversations_ms == 250
    assert cfg.delays.after_login_ms == 5000


def test_environment_wins_over_ini(tmp_path):
    ini = tmp_path / "config.ini"
    ini.write_text("[timeouts]\nlogin_ms = 1000\n", encoding="utf-8")
    env = {
        "MESSAGEKIT_TIMEOUTS_LOGIN_MS": "600000",
        "MESSAGEKIT_BROWSER_LOG_CONSOLE": "off",
        "MESSAGEKIT_TARGET_URL": "https://example.test/web",
    }

    cfg = engine.load(ini, environ=env)

    assert cfg.timeouts.login_ms == 600000
    assert cfg.browser.log_console is False
    assert cfg.target.url == "https://example.test/web"


def test_invalid_boolean_is_rejected(tmp_path):
    ini = tmp_path / "config.ini"
    ini.write_text("[browser]\nheadless = maybe\n", encoding="utf-8")

    with pytest.raises(ValueError):
        engine.load(ini, environ={})


def test_dotenv_file_is_read(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MESSAGEKIT_OUTPUT_INDENT", raising=False)
    (tmp_path / ".env").write_text("MESSAGEKIT_OUTPUT_INDENT=4\n", encoding="utf-8")

    try:
        cfg = engine.load(tmp_path / "config.ini")
    finally:
        os.environ.pop("MESSAGEKIT_OUTPUT_INDENT", None)

    assert cfg.output.indent == 4
