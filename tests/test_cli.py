"""Tests for the command line front end."""

from unittest.mock import MagicMock, patch

import pytest

from precession import cli
from precession.errors import ExecutionError


@pytest.fixture
def definition(tmp_path, web_project_yaml):
    path = tmp_path / "web.yaml"
    path.write_text(web_project_yaml)
    return path


class TestPlan:
    def test_prints_one_line_per_operation(self, definition, capsys):
        assert cli.main(["plan", "-f", str(definition)]) == 0
        lines = capsys.readouterr().out.splitlines()

        assert len(lines) == 15
        assert lines[0] == "tmux new-session -d -s 'My web project' -n Code -c /home/user/web"
        assert lines[1] == "tmux send-keys -t 'My web project:0.0' 'vim .' Enter"
        assert lines[5] == "tmux select-layout -t 'My web project:1' even-horizontal"
        assert not any("2.2" in line for line in lines)

    def test_alias(self, definition, capsys):
        assert cli.main(["plan", "-f", str(definition), "web", "web-2"]) == 0
        assert capsys.readouterr().out.startswith("tmux new-session -d -s web-2 ")

    def test_validation_error(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("name: s\nwindows:\n  - cmd: vim\n    panes: [ls]\n")
        assert cli.main(["plan", "-f", str(path)]) == cli.EXIT_DEFINITION
        assert "mutually exclusive" in capsys.readouterr().err

    def test_missing_definition(self, tmp_path, capsys):
        assert cli.main(["plan", "-f", str(tmp_path / "nope.yaml")]) == cli.EXIT_DEFINITION
        assert "not found" in capsys.readouterr().err


class TestStart:
    def test_executes_compiled_operations(self, definition, capsys):
        executor = MagicMock()
        executor.execute.return_value.session_name = "My web project"
        with patch.object(cli, "TmuxExecutor", return_value=executor) as factory, \
                patch.object(cli, "tmux_server") as server:
            assert cli.main(["start", "-f", str(definition), "--socket", "test"]) == 0

        server.assert_called_once_with("test")
        factory.assert_called_once_with(server.return_value)
        ops = executor.execute.call_args.args[0]
        assert len(ops) == 15
        assert "tmux session 'My web project' started." in capsys.readouterr().out

    def test_execution_error(self, definition, capsys):
        executor = MagicMock()
        executor.execute.side_effect = ExecutionError(0, "op", "duplicate session")
        with patch.object(cli, "TmuxExecutor", return_value=executor), patch.object(cli, "tmux_server"):
            assert cli.main(["start", "-f", str(definition)]) == cli.EXIT_EXECUTION
        assert "duplicate session" in capsys.readouterr().err

    def test_attach_execs_tmux(self, definition):
        executor = MagicMock()
        executor.execute.return_value.session_name = "web"
        with patch.object(cli, "TmuxExecutor", return_value=executor), \
                patch.object(cli, "tmux_server"), \
                patch.object(cli.os, "execvp") as execvp:
            cli.main(["start", "-f", str(definition), "--attach"])
        execvp.assert_called_once_with("tmux", ["tmux", "attach-session", "-t", "web"])


class TestList:
    def test_lists_definitions(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "precession").mkdir()
        (tmp_path / "precession" / "web.yaml").write_text("")
        assert cli.main(["list"]) == 0
        assert capsys.readouterr().out == "web\n"

    def test_no_definitions(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert cli.main(["list"]) == 0
        assert "no session definitions" in capsys.readouterr().out
