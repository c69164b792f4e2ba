"""Tests for configuration loading."""

import pytest

from taskly.config import Config, load_config


@pytest.fixture
def conf_file(tmp_path):
    return tmp_path / "taskly.conf"


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "missing.conf")
    assert config == Config()
    assert config.api_base == "http://localhost:5050"
    assert config.due_soon_days == 7
    assert config.top_n == 5


def test_parses_values(conf_file):
    conf_file.write_text(
        "# Taskly settings\n"
        "\n"
        "API_BASE=https://taskly.example.com/\n"
        'API_TOKEN="abc#123" # token from the app\n'
        "DUE_SOON_DAYS = 3\n"
        "TOP_N=10 # show more\n"
    )
    config = load_config(conf_file)
    assert config.api_base == "https://taskly.example.com"
    assert config.api_token == "abc#123"
    assert config.due_soon_days == 3
    assert config.top_n == 10


def test_single_quotes(conf_file):
    conf_file.write_text("API_TOKEN='secret'\n")
    assert load_config(conf_file).api_token == "secret"


def test_ignores_junk_lines_and_unknown_keys(conf_file):
    conf_file.write_text("not a setting\nCOLOR=blue\nTOP_N=2\n")
    assert load_config(conf_file) == Config(top_n=2)


def test_bad_integer_keeps_default(conf_file, caplog):
    conf_file.write_text("TOP_N=lots\n")
    assert load_config(conf_file).top_n == 5
    assert "TOP_N" in caplog.text
