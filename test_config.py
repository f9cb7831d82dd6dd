"""
Tests for configuration loading
"""

import sys

import pytest

from config.config import (
    BechdelConfig,
    SETTINGS,
    load_config,
    load_from_config_file,
    load_from_dotenv,
    load_from_env,
    validate_config,
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for setting, _ in SETTINGS.values():
        # setenv first so values exported from .env are removed on teardown
        monkeypatch.setenv(setting, "")
        monkeypatch.delenv(setting)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_env_parses_every_setting():
    environ = {
        'WEB_UI_HOST': '127.0.0.1',
        'WEB_UI_PORT': '8080',
        'DEBUG_MODE': 'yes',
        'DATABASE_PATH': 'songs.db',
        'ITUNES_SEARCH_URL': 'http://localhost/search',
        'LYRICS_OVH_URL': 'http://localhost/v1',
        'REQUEST_TIMEOUT': '2.5',
        'SEARCH_RESULT_LIMIT': '5',
        'LOG_LEVEL': 'debug',
        'LOG_FILE': 'test.log',
    }

    config = load_from_env(environ)

    assert config == {
        'web_ui_host': '127.0.0.1',
        'web_ui_port': 8080,
        'debug_mode': True,
        'database_path': 'songs.db',
        'itunes_search_url': 'http://localhost/search',
        'lyrics_ovh_url': 'http://localhost/v1',
        'request_timeout': 2.5,
        'search_result_limit': 5,
        'log_level': 'DEBUG',
        'log_file': 'test.log',
    }


def test_config_file_maps_provider_and_log_settings(clean_env, monkeypatch):
    (clean_env / "bechdel_test_web_config.py").write_text(
        "WEB_UI_PORT = 9000\n"
        "LYRICS_OVH_URL = 'http://lyrics.local/v1'\n"
        "REQUEST_TIMEOUT = 3\n"
        "LOG_LEVEL = 'warning'\n"
        "DEBUG_MODE = True\n"
    )
    monkeypatch.syspath_prepend(str(clean_env))

    config = load_from_config_file('bechdel_test_web_config')

    assert config == {
        'web_ui_port': 9000,
        'lyrics_ovh_url': 'http://lyrics.local/v1',
        'request_timeout': 3.0,
        'log_level': 'WARNING',
        'debug_mode': True,
    }
    sys.modules.pop('bechdel_test_web_config', None)


def test_missing_config_file_is_ignored():
    assert load_from_config_file('no_such_bechdel_config_module') == {}


def test_dotenv_is_overridden_by_environment(clean_env, monkeypatch):
    (clean_env / ".env").write_text(
        "# local settings\n"
        "WEB_UI_PORT=7000\n"
        "LOG_LEVEL=\"error\"\n"
    )
    monkeypatch.setenv('WEB_UI_PORT', '7100')

    assert load_from_dotenv() == {'web_ui_port': 7000, 'log_level': 'ERROR'}

    config = load_config()

    assert config.web_ui_port == 7100
    assert config.log_level == 'ERROR'


def test_defaults_without_any_source(clean_env):
    assert load_config() == BechdelConfig()


def test_validation_errors():
    config = BechdelConfig(web_ui_port=0, database_path='', request_timeout=0, search_result_limit=0, log_level='LOUD')

    assert validate_config(config) == [
        "Web UI port must be between 1 and 65535",
        "Database path is required",
        "Request timeout must be positive",
        "Search result limit must be at least 1",
        "Log level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    ]


def test_invalid_values_exit(clean_env, monkeypatch):
    monkeypatch.setenv('WEB_UI_PORT', 'not-a-port')

    with pytest.raises(SystemExit) as exc_info:
        load_config()

    assert exc_info.value.code == 1
