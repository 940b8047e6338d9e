"""Tests for the click entry point."""

import pytest
from click.testing import CliRunner

from linoise import __version__
from linoise.history import HistoryStore
from linoise.main import cli, run_editor
from linoise.reader import PromptLine


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def use_reader(monkeypatch, scripted_reader):
    """Replace the prompt_toolkit reader in the CLI with a scripted one."""

    def _install(*answers):
        readers = []

        def factory(history=None):
            reader = scripted_reader(*answers, history=history)
            readers.append(reader)
            return reader

        monkeypatch.setattr("linoise.main.PromptToolkitReader", factory)
        return readers

    return _install


class TestVersion:
    def test_version_option(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestRunEditor:
    def test_counts_lines_until_eof(self, scripted_reader):
        reader = scripted_reader("ls", "", KeyboardInterrupt(), "pwd")
        assert run_editor(reader, PromptLine("> ")) == 2
        assert len(reader.prompts) == 5


class TestEdit:
    def test_session_is_saved(self, runner, use_reader, tmp_path):
        path = tmp_path / "history"
        path.write_text("old\n")
        use_reader("ls", KeyboardInterrupt(), " secret", "")

        result = runner.invoke(cli, ["edit", "--history", str(path)])

        assert result.exit_code == 0
        assert "ls" in result.output
        assert "Goodbye" in result.output
        assert path.read_text() == "old\nls\n"

    def test_history_size(self, runner, use_reader, tmp_path):
        path = tmp_path / "history"
        path.write_text("a\nb\nc\n")
        use_reader("d")

        result = runner.invoke(cli, ["edit", "--history", str(path), "--size", "2"])

        assert result.exit_code == 0
        assert path.read_text() == "c\nd\n"

    def test_reader_gets_history(self, runner, use_reader, tmp_path):
        readers = use_reader()
        runner.invoke(cli, ["edit", "--history", str(tmp_path / "history")])
        assert readers[0].history is not None

    def test_custom_prompt(self, runner, use_reader, tmp_path):
        readers = use_reader()
        runner.invoke(
            cli, ["edit", "--history", str(tmp_path / "h"), "--prompt", "matrix> "]
        )
        assert readers[0].prompts[0] == PromptLine("matrix> ")

    def test_bad_size(self, runner, use_reader, tmp_path):
        path = tmp_path / "history"
        use_reader()
        result = runner.invoke(cli, ["edit", "--history", str(path), "--size", "0"])
        assert result.exit_code == 2
        assert "wrong size" in result.output
        assert not path.exists()

    def test_unopenable_file(self, runner, use_reader, tmp_path):
        use_reader()
        result = runner.invoke(
            cli, ["edit", "--history", str(tmp_path / "missing" / "history")]
        )
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_undecodable_history_file(self, runner, use_reader, tmp_path):
        path = tmp_path / "history"
        path.write_bytes(b"ok\n\xff\n")
        use_reader("ls")

        result = runner.invoke(cli, ["edit", "--history", str(path)])

        assert result.exit_code == 0
        assert path.read_bytes() == b"ok\n\xff\nls\n"

    def test_history_closed_on_unexpected_error(
        self, runner, use_reader, monkeypatch, tmp_path
    ):
        stores = []

        def open_store(*args):
            store = HistoryStore(*args)
            stores.append(store)
            return store

        monkeypatch.setattr("linoise.main.HistoryStore", open_store)
        use_reader(RuntimeError("terminal gone"))

        result = runner.invoke(cli, ["edit", "--history", str(tmp_path / "history")])

        assert isinstance(result.exception, RuntimeError)
        assert stores[0].closed is True


class TestAsk:
    def test_answers_printed(self, runner, use_reader):
        use_reader("", "30", "", "blue", "n")
        result = runner.invoke(cli, ["ask"])
        assert result.exit_code == 0
        assert "guest" in result.output
        assert "30" in result.output
        assert "1.75" in result.output
        assert "blue" in result.output
        assert "False" in result.output

    def test_validation_messages(self, runner, use_reader):
        use_reader("42", "ann", "old", "30", "", "", "")
        result = runner.invoke(cli, ["ask"])
        assert result.exit_code == 0
        assert "the value has to be a string" in result.output
        assert "the value has to be an integer" in result.output
        assert "ann" in result.output

    def test_cancelled(self, runner, use_reader):
        use_reader("bob")
        result = runner.invoke(cli, ["ask"])
        assert result.exit_code == 1
        assert "Cancelled" in result.output
