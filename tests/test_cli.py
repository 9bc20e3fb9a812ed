"""Tests for the command line entry point (polymd.cli)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from polymd.cli import build_parser, main
from polymd.scaffolder import ManifestError


class TestParser:
    @pytest.mark.unit
    def test_flags_default_off(self):
        args = build_parser().parse_args(["my-el"])
        assert args.name == "my-el"
        assert args.arc is False
        assert args.tests is False
        assert args.demo is False
        assert args.deps is False
        assert args.travis is False
        assert args.description is None
        assert args.path is None

    @pytest.mark.unit
    def test_all_options(self):
        args = build_parser().parse_args(
            [
                "my-el",
                "--description", "A thing",
                "--author", "Jane",
                "--version", "1.0.0",
                "--repository", "jdoe",
                "--path", "/tmp/x",
                "--arc", "--tests", "--demo", "--deps", "--travis",
            ]
        )
        assert args.description == "A thing"
        assert args.author == "Jane"
        assert args.version == "1.0.0"
        assert args.repository == "jdoe"
        assert args.path == "/tmp/x"
        assert all([args.arc, args.tests, args.demo, args.deps, args.travis])

    @pytest.mark.unit
    def test_version_help_names_the_component(self):
        help_text = " ".join(build_parser().format_help().split())
        assert "Initial version of the component, not of polymd" in help_text
        assert "--polymd-version" in help_text

    @pytest.mark.unit
    def test_polymd_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--polymd-version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("polymd ")


class TestMain:
    @pytest.mark.unit
    def test_invalid_name_exits_non_zero(self, tmp_path: Path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["button", "--path", str(tmp_path / "out")])
        assert exc_info.value.code == 1
        assert "The name of the component is invalid" in capsys.readouterr().out
        assert not (tmp_path / "out").exists()

    @pytest.mark.unit
    def test_scaffolds_into_path(self, tmp_path: Path):
        target = tmp_path / "out"
        main(["my-el", "--path", str(target), "--tests", "--author", "Jane"])
        assert (target / "my-el.html").is_file()
        assert (target / "test" / "basic-test.html").is_file()
        assert "Jane" in (target / "package.json").read_text(encoding="utf-8")

    @pytest.mark.unit
    def test_deps_failure_still_succeeds(self, tmp_path: Path, capsys):
        target = tmp_path / "out"
        with patch(
            "polymd.scaffolder.generator.run_command",
            new_callable=AsyncMock,
            return_value=(1, "", "npm not found"),
        ):
            main(["my-el", "--path", str(target), "--deps"])
        out = capsys.readouterr().out
        assert "Unable to install dependencies." in out
        assert "All set." in out

    @pytest.mark.unit
    def test_error_reported_through_print_error(self, tmp_path: Path):
        with patch("polymd.cli.print_error", new_callable=MagicMock) as mock_error:
            with pytest.raises(SystemExit):
                main(["button", "--path", str(tmp_path / "out")])
        mock_error.assert_called_once()
        assert mock_error.call_args.args[0].startswith("Error: ")

    @pytest.mark.unit
    def test_markup_in_error_is_escaped(self, tmp_path: Path, capsys):
        with pytest.raises(SystemExit):
            main(["[bold]", "--path", str(tmp_path / "out")])
        assert "[bold]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_manifest_error_exits_non_zero(self, tmp_path: Path, capsys):
        target = tmp_path / "out"
        error = ManifestError(Path("bower.json"), "license")
        with patch("polymd.scaffolder.generator.patch_branded_manifests", side_effect=error):
            with pytest.raises(SystemExit) as exc_info:
                main(["my-el", "--path", str(target), "--arc"])
        assert exc_info.value.code == 1
        assert "bower.json" in capsys.readouterr().out
