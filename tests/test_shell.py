import io
import stat

import pytest

from minishell.shell import main, make_state, run_line


def _make_script(directory, name, body):
    path = directory / name
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


def test_make_state_reads_environment():
    state = make_state({"PATH": "/a:/b", "HISTFILE": "/tmp/h"})
    assert state.paths == ["/a", "/b"]
    assert state.histfile == "/tmp/h"
    assert state.is_builtin("cd")
    assert state.history == []


def test_run_line_ignores_blank_lines():
    state = make_state({"PATH": ""})
    run_line("   ", state)
    assert state.history == []


def test_run_line_records_trimmed_history(capsys):
    state = make_state({"PATH": ""})
    run_line("  echo hi  ", state)
    assert state.history == ["echo hi"]
    assert capsys.readouterr().out == "hi\n"


def test_run_line_redirects_builtin_output(tmp_path):
    state = make_state({"PATH": ""})
    target = tmp_path / "out.txt"
    run_line(f"echo first > {target}", state)
    run_line(f"echo second >> {target}", state)
    assert target.read_text() == "first\nsecond\n"


def test_run_line_unknown_command(capsys):
    state = make_state({"PATH": ""})
    run_line("nosuchcmd arg", state)
    assert capsys.readouterr().err == "nosuchcmd: command not found\n"


def test_run_line_redirection_error(capsys, tmp_path):
    state = make_state({"PATH": ""})
    run_line(f"echo hi > {tmp_path}/missing/dir/file", state)
    assert capsys.readouterr().err.startswith("Redirection error:")


def test_run_line_external_with_redirect(tmp_path):
    _make_script(tmp_path, "say", 'echo "$1"')
    state = make_state({"PATH": str(tmp_path)})
    target = tmp_path / "said.txt"
    run_line(f"say 'hello world' > {target}", state)
    assert target.read_text() == "hello world\n"


def test_run_line_pipeline_builtin_into_external(tmp_path):
    _make_script(tmp_path, "sink", 'cat > "$1"')
    state = make_state({"PATH": str(tmp_path)})
    target = tmp_path / "piped.txt"
    run_line(f"echo hello | sink {target}", state)
    assert target.read_text() == "hello\n"


def test_run_line_pipeline_failure(capsys):
    state = make_state({"PATH": ""})
    run_line("nosuchcmd | echo hi", state)
    assert "pipeline execution failed" in capsys.readouterr().err


def test_run_line_exit_raises():
    state = make_state({"PATH": ""})
    with pytest.raises(SystemExit) as info:
        run_line("exit 4", state)
    assert info.value.code == 4


def test_main_runs_until_end_of_input(monkeypatch, capsys):
    monkeypatch.delenv("HISTFILE", raising=False)
    monkeypatch.setattr("sys.stdin", io.StringIO("echo hi\nhistory\n"))
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "hi\n" in out
    assert "    1  echo hi\n" in out
    assert "    2  history\n" in out


def test_main_loads_and_saves_histfile(monkeypatch, tmp_path):
    histfile = tmp_path / "hist"
    histfile.write_text("old command\n\n")
    monkeypatch.setenv("HISTFILE", str(histfile))
    monkeypatch.setattr("sys.stdin", io.StringIO("echo new\nexit 0\n"))
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 0
    assert histfile.read_text().splitlines() == ["old command", "echo new", "exit 0"]