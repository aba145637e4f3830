import sys

from minishell.config import Output, Redirection, ShellState, default_paths


def _noop(args, out, state):
    return None


def test_default_paths_splits_on_colon():
    assert default_paths({"PATH": "/usr/bin:/bin"}) == ["/usr/bin", "/bin"]


def test_default_paths_without_path_variable():
    assert default_paths({}) == [""]


def test_is_builtin():
    state = ShellState(commands={"echo": _noop})
    assert state.is_builtin("echo")
    assert not state.is_builtin("ls")


def test_builtin_names_keep_registration_order():
    state = ShellState(commands={"pwd": _noop, "cd": _noop})
    assert state.builtin_names == ["pwd", "cd"]


def test_new_state_has_empty_history():
    state = ShellState()
    assert state.history == []
    assert state.history_append_index == 0
    assert state.histfile == ""


def test_redirection_defaults_to_truncate():
    redirection = Redirection("out.txt")
    assert redirection.file == "out.txt"
    assert redirection.append is False


def test_output_defaults_to_process_streams():
    out = Output()
    assert out.stdout is sys.stdout
    assert out.stderr is sys.stderr
    assert not out.owns_stdout and not out.owns_stderr


def test_output_close_only_closes_owned_streams(tmp_path):
    owned = open(tmp_path / "owned", "w")
    shared = open(tmp_path / "shared", "w")
    out = Output(stdout=owned, stderr=shared, owns_stdout=True)
    out.close()
    assert owned.closed
    assert not shared.closed
    shared.close()