"""Smoke tests: imports work, CLI --help works."""

from click.testing import CliRunner

from sankey_layout.__main__ import main


def test_import():
    import sankey_layout

    assert sankey_layout.layout_graph is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Sankey flow graph layout" in result.output
