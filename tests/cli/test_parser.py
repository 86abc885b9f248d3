"""
Tests for the setup-go command-line interface.
"""

import os
from unittest.mock import patch

import pytest

from setupgo import __version__
from setupgo.cli.parser import CLI


@pytest.fixture
def cli():
    return CLI()


class TestArgumentParsing:
    """Tests for CLI.parse_args()."""

    def test_defaults(self, cli):
        args = cli.parse_args([])

        assert args.go_version is None
        assert args.cache_integration is None
        assert args.cache_repository is None
        assert args.verbose is False

    def test_all_options(self, cli, tmp_path):
        args = cli.parse_args(
            [
                "--go-version",
                "1.21.0",
                "--cache-integration",
                "rt",
                "--cache-repository",
                "go-remote",
                "--workspace",
                str(tmp_path),
                "--export-file",
                str(tmp_path / "env.sh"),
                "-v",
            ]
        )

        assert args.go_version == "1.21.0"
        assert args.cache_integration == "rt"
        assert args.cache_repository == "go-remote"
        assert args.workspace == tmp_path
        assert args.export_file == tmp_path / "env.sh"
        assert args.verbose is True

    def test_version_flag(self, cli, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_args(["--version"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == f"setup-go {__version__}"


class TestRun:
    """Tests for CLI.run()."""

    def test_flags_reach_runner(self, cli, tmp_path):
        export_file = tmp_path / "env.sh"

        with patch("setupgo.cli.parser.SetupRunner") as runner_cls:
            runner_cls.return_value.run.return_value = 0
            code = cli.run(
                [
                    "--go-version",
                    "1.21.0",
                    "--workspace",
                    str(tmp_path),
                    "--export-file",
                    str(export_file),
                ]
            )

        assert code == 0
        kwargs = runner_cls.call_args.kwargs
        assert kwargs["reader"].get_input("version") == "1.21.0"
        assert kwargs["workspace_dir"] == tmp_path
        assert kwargs["environment"].export_file == export_file

    def test_config_file_in_workspace(self, cli, tmp_path):
        (tmp_path / "setup-go.yaml").write_text(
            "inputs:\n"
            "  version: '1.20.5'\n"
            "  cacheRepository: go-remote\n"
            "integrations:\n"
            "  - name: rt\n"
            "    masterName: artifactory\n"
            "    url: https://acme.jfrog.io/artifactory\n"
        )

        with patch("setupgo.cli.parser.SetupRunner") as runner_cls:
            runner_cls.return_value.run.return_value = 0
            cli.run(["--workspace", str(tmp_path)])

        kwargs = runner_cls.call_args.kwargs
        assert kwargs["reader"].get_input("version") == "1.20.5"
        assert kwargs["reader"].get_input("cacheRepository") == "go-remote"
        assert kwargs["directory"].get_integration("rt").master_name == "artifactory"

    def test_missing_explicit_config(self, cli, tmp_path):
        code = cli.run(["--config", str(tmp_path / "missing.yaml")])

        assert code == 1

    def test_invalid_config(self, cli, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("inputs: [unclosed\n")

        assert cli.run(["--config", str(config)]) == 1

    def test_missing_version_exits_1(self, cli, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            cli.run(["--workspace", str(tmp_path)])

        assert exc_info.value.code == 1

    def test_keyboard_interrupt(self, cli, tmp_path):
        with patch("setupgo.cli.parser.SetupRunner") as runner_cls:
            runner_cls.return_value.run.side_effect = KeyboardInterrupt

            assert cli.run(["--workspace", str(tmp_path)]) == 130


@pytest.mark.integration
class TestEndToEnd:
    """Installs a real Go release (requires network and --integration)."""

    def test_install_go(self, cli, tmp_path):
        export_file = tmp_path / "env.sh"

        code = cli.run(
            [
                "--go-version",
                "1.21.0",
                "--workspace",
                str(tmp_path),
                "--export-file",
                str(export_file),
            ]
        )

        assert code == 0
        assert os.environ["GOROOT"] == os.path.join(str(tmp_path.resolve()), "go", "go")
        assert "GOROOT" in export_file.read_text()
