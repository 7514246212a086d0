"""Tests for epictrack.lib.envparse module."""

import pytest

from epictrack.lib.envparse import load_env


@pytest.fixture
def env_file(tmp_path):
    def write(content):
        path = tmp_path / "tracker.env"
        path.write_text(content)
        return path
    return write


class TestLoadEnv:
    """Tests for load_env()."""

    def test_basic(self, env_file):
        path = env_file("DB_PATH=data/db.json\nLOG_LEVEL=DEBUG\n")
        assert load_env(path) == {"DB_PATH": "data/db.json", "LOG_LEVEL": "DEBUG"}

    def test_comments_and_blank_lines(self, env_file):
        path = env_file("# settings\n\nLOG_LEVEL=INFO  # default\n")
        assert load_env(path) == {"LOG_LEVEL": "INFO"}

    def test_quotes(self, env_file):
        path = env_file('DB_PATH="my data/db.json"\nLOG_FILE=\'a # b.log\'\n')
        assert load_env(path) == {"DB_PATH": "my data/db.json", "LOG_FILE": "a # b.log"}

    def test_export_prefix(self, env_file):
        assert load_env(env_file("export LOG_LEVEL=ERROR\n")) == {"LOG_LEVEL": "ERROR"}

    def test_empty_value(self, env_file):
        assert load_env(env_file("DB_PATH=\n")) == {"DB_PATH": ""}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_env(tmp_path / "nope.env")

    @pytest.mark.parametrize("content, message", [
        ("DB_PATH\n", "Expected KEY=value"),
        ("db_path=x\n", "Invalid key"),
        ("DB_PATH=a\nDB_PATH=b\n", "Duplicate key"),
        ('DB_PATH="unterminated\n', "Unterminated"),
        ('DB_PATH="a" b\n', "Unexpected text"),
    ])
    def test_malformed(self, env_file, content, message):
        with pytest.raises(ValueError, match=message):
            load_env(env_file(content))

    @pytest.mark.parametrize("value", ["$HOME/db.json", "${HOME}/db.json", "$(pwd)/db.json", "`pwd`"])
    def test_shell_expansion_rejected(self, env_file, value):
        with pytest.raises(ValueError, match="Shell expansion"):
            load_env(env_file(f"DB_PATH={value}\n"))

    def test_single_quotes_are_literal(self, env_file):
        assert load_env(env_file("DB_PATH='$HOME/db.json'\n")) == {"DB_PATH": "$HOME/db.json"}

    def test_error_names_line(self, env_file):
        with pytest.raises(ValueError, match="Line 3"):
            load_env(env_file("A=1\n# ok\nbad line\n"))
