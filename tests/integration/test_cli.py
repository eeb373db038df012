"""Integration tests for CLI module."""

import pyperclip
import pytest
from click.testing import CliRunner

from mdpaste.cli import cli, load_config


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep logs and default config out of the real home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def no_config(tmp_path):
    return tmp_path / "missing-config.yaml"


def write_markdown(tmp_path, text, name="notes.md"):
    path = tmp_path / name
    path.write_text(text)
    return path


class TestPasteCommand:
    """Integration tests for CLI paste command."""

    def test_paste_file_creates_pages(self, tmp_path, graph_dir, no_config):
        """Test every '# Heading' becomes its own page."""
        notes = write_markdown(tmp_path, "# Hello\nWorld\n# Tasks\n- [x] done\n- [ ] open")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["paste", "--file", str(notes), "--graph", str(graph_dir), "--config", str(no_config)],
        )

        assert result.exit_code == 0, result.output
        assert "Import Complete: Created 2 notes from clipboard." in result.output
        assert "Open:" in result.output
        assert (graph_dir / "pages" / "Hello.md").read_text() == "- World\n"
        assert (graph_dir / "pages" / "Tasks.md").read_text() == "- DONE done\n- TODO open\n"

    def test_paste_uses_graph_from_config(self, tmp_path, graph_dir):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            f"graph:\n  graph_path: {graph_dir}\nimport:\n  fallback_title: Clipboard\n"
        )
        notes = write_markdown(tmp_path, "- just a bullet")

        runner = CliRunner()
        result = runner.invoke(cli, ["paste", "--file", str(notes), "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert (graph_dir / "pages" / "Clipboard.md").read_text() == "- just a bullet\n"

    def test_paste_file_with_byte_order_mark(self, tmp_path, graph_dir, no_config):
        """Test a UTF-8 BOM doesn't hide the first heading."""
        notes = tmp_path / "bom.md"
        notes.write_text("# Title\nbody", encoding="utf-8-sig")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["paste", "--file", str(notes), "--graph", str(graph_dir), "--config", str(no_config)],
        )

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in (graph_dir / "pages").iterdir()) == ["Title.md"]
        assert (graph_dir / "pages" / "Title.md").read_text() == "- body\n"

    def test_paste_from_stdin(self, graph_dir, no_config):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["paste", "--file", "-", "--graph", str(graph_dir), "--config", str(no_config)],
            input="# From Stdin\n**bold** text",
        )

        assert result.exit_code == 0, result.output
        assert (graph_dir / "pages" / "From Stdin.md").read_text() == "- **bold** text\n"

    def test_paste_into_existing_page(self, tmp_path, graph_dir, no_config):
        page = graph_dir / "pages" / "Inbox.md"
        page.write_text("- existing\n  - child\n")
        notes = write_markdown(tmp_path, "# Heading stays\n- new")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "paste", "--file", str(notes), "--into", "Inbox",
                "--graph", str(graph_dir), "--config", str(no_config),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Paste Complete" in result.output
        assert page.read_text() == "- existing\n  - child\n- # Heading stays\n- new\n"
        assert sorted(p.name for p in (graph_dir / "pages").iterdir()) == ["Inbox.md"]

    def test_paste_into_missing_page(self, tmp_path, graph_dir, no_config):
        notes = write_markdown(tmp_path, "x")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "paste", "--file", str(notes), "--into", "Nope",
                "--graph", str(graph_dir), "--config", str(no_config),
            ],
        )

        assert result.exit_code == 1
        assert "Page not found: Nope" in result.output

    def test_paste_without_graph(self, tmp_path, no_config):
        notes = write_markdown(tmp_path, "x")

        runner = CliRunner()
        result = runner.invoke(cli, ["paste", "--file", str(notes), "--config", str(no_config)])

        assert result.exit_code == 1
        assert "No Logseq graph configured" in result.output

    def test_paste_empty_input(self, tmp_path, graph_dir, no_config):
        notes = write_markdown(tmp_path, "  \n\n")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["paste", "--file", str(notes), "--graph", str(graph_dir), "--config", str(no_config)],
        )

        assert result.exit_code == 1
        assert "Clipboard is empty: Copy some markdown text first!" in result.output
        assert list((graph_dir / "pages").iterdir()) == []

    def test_paste_reads_clipboard(self, graph_dir, no_config, monkeypatch):
        monkeypatch.setattr(pyperclip, "paste", lambda: "# Clip\n1. first")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["paste", "--graph", str(graph_dir), "--config", str(no_config)]
        )

        assert result.exit_code == 0, result.output
        assert (graph_dir / "pages" / "Clip.md").read_text() == (
            "- first\n  logseq.order-list-type:: number\n"
        )

    def test_paste_reports_unreadable_clipboard(self, graph_dir, no_config, monkeypatch):
        def no_backend():
            raise pyperclip.PyperclipException("no copy/paste mechanism")

        monkeypatch.setattr(pyperclip, "paste", no_backend)

        runner = CliRunner()
        result = runner.invoke(
            cli, ["paste", "--graph", str(graph_dir), "--config", str(no_config)]
        )

        assert result.exit_code == 1
        assert "Paste Failed" in result.output

    def test_paste_with_invalid_config(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("import:\n  indent_width: 99\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["paste", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output


class TestPreviewCommand:
    """Integration tests for CLI preview command."""

    def test_preview_renders_pages_without_writing(self, tmp_path, no_config):
        notes = write_markdown(tmp_path, "# One\n- a\n  - b\n# Two\n```py\nx = 1\n```")

        runner = CliRunner()
        result = runner.invoke(cli, ["preview", "--file", str(notes), "--config", str(no_config)])

        assert result.exit_code == 0, result.output
        assert "One" in result.output
        assert "- a\n  - b\n" in result.output
        assert "- ```py\n  x = 1\n  ```\n" in result.output

    def test_preview_empty_input(self, no_config):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["preview", "--file", "-", "--config", str(no_config)], input="\n"
        )

        assert result.exit_code == 1
        assert "Copy some markdown text first!" in result.output


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "mdpaste" in result.output


def test_load_config_defaults(tmp_path):
    config = load_config(tmp_path / "none.yaml")

    assert config.graph.graph_path is None
    assert config.import_.code_language == "plaintext"


def test_verbose_logs_debug_events(tmp_path, isolated_home, no_config):
    notes = write_markdown(tmp_path, "# V\n- a")

    runner = CliRunner()
    result = runner.invoke(
        cli, ["--verbose", "preview", "--file", str(notes), "--config", str(no_config)]
    )

    assert result.exit_code == 0, result.output
    assert (isolated_home / ".cache" / "mdpaste" / "logs" / "mdpaste.log").exists()
