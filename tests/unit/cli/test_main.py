"""
Unit tests for the pubscope command group.
"""

import logging
from unittest.mock import patch

from click.testing import CliRunner

from pubscope.cli.main import main


class TestMain:

    def test_commands_registered(self):
        assert set(main.commands) == {"resolve", "why", "pom", "bundle"}

    def test_help(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Publication scope resolution" in result.output

    def test_verbose_enables_debug_logging(self, tmp_path):
        path = tmp_path / "pubscope.toml"
        path.write_text('[project]\nname = "app"\n')

        with patch("pubscope.cli.main.logging.basicConfig") as basic_config:
            result = CliRunner().invoke(main, ["--verbose", "resolve", "-m", str(path)])

        assert result.exit_code == 0, result.output
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_default_logging_level(self, tmp_path):
        path = tmp_path / "pubscope.toml"
        path.write_text('[project]\nname = "app"\n')

        with patch("pubscope.cli.main.logging.basicConfig") as basic_config:
            CliRunner().invoke(main, ["resolve", "-m", str(path)])

        assert basic_config.call_args.kwargs["level"] == logging.WARNING
