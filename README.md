# minishell

A small interactive shell. It shows a `$ ` prompt and reads lines. It runs
builtins, or programs found on `PATH`. It supports quoting, output redirection,
pipelines, command history and tab completion of command names.

## Install

```
pip install .
```

## Run

```
minishell
```

To leave, type `exit [status]`, press Ctrl-D or press Ctrl-C.

When standard input is a terminal, the shell uses Python's `readline` module,
if it is available, for line editing and completion. It keeps the line-editing
history in `/tmp/readline.tmp` between sessions. When input is not a terminal,
lines are read plainly and no prompt decoration such as `exit` or `^C` is
printed at the end.

## Features

### Builtins

`exit`, `echo`, `type`, `pwd`, `cd` and `history`.

- `exit [N]` saves the history to `HISTFILE`, if that variable is set. It then
  leaves with status `N`, or 0 when no status is given.
- `type NAME` reports whether `NAME` is a builtin, an executable on `PATH`, or
  neither (`NAME: not found`).
- `cd` behaves as follows:
  - With no argument it goes to `$HOME`.
  - `cd -` goes back to the previous directory and prints it.
  - `~` at the start of a path stands for `$HOME`.

### Quoting

- Single quotes keep their contents literally.
- Inside double quotes, `\` escapes only `"`, `\`, `$` and `` ` ``.
- Outside quotes, a backslash escapes the next character.

### Redirection

| Operator | Effect |
| --- | --- |
| `>` and `1>` | write stdout to a file |
| `>>` and `1>>` | append stdout to a file |
| `2>` | write stderr to a file |
| `2>>` | append stderr to a file |

If a stream has more than one redirection, the last one wins.

### Pipelines

Write a pipeline as `cmd1 | cmd2 | ...`. Builtins can appear at any stage.
Redirection operators inside a pipeline are dropped.

### Completion

Tab completes builtin names and names of entries in the `PATH` directories.

- A single match is completed in full, followed by a space.
- Several matches are completed up to their common prefix.
- If no more can be completed, the first Tab rings the bell and a second Tab
  lists the matches.

### History

- `history` lists every entry.
- `history N` lists the last N entries.
- `history -r FILE` appends the non-blank lines of a file to the history.
- `history -w FILE` writes all entries to a file.
- `history -a FILE` appends the entries added since the last append.
- If `HISTFILE` is set, history is loaded from it at start-up and written back
  to it on `exit`.

## Examples

```
$ echo 'hello   world' "quoted \"text\""
hello   world quoted "text"
$ type echo
echo is a shell builtin
$ ls /tmp > listing.txt
$ cat listing.txt | wc -l
$ cd ~/projects
$ cd -
$ history 3
```

## Use from Python

```python
from minishell.shell import make_state, run_line

state = make_state()          # PATH and HISTFILE taken from os.environ
run_line("echo hi > out.txt", state)
```

Other functions you can call directly:

- `minishell.parser.separate_command_args` splits a line into a command and its
  arguments.
- `minishell.parser.parse_redirections` picks out redirection operators.
- `minishell.executor.find_executable` searches a list of directories for an
  executable.
- `minishell.completer.AutoCompleter` offers completion suggestions without a
  terminal.

Running `exit` through `run_line` raises `SystemExit`.

## What it does not do

This is a deliberately small shell. It has none of the following:

- variable expansion
- globbing
- command substitution
- job control or background jobs
- command lists such as `;`, `&&` and `||`
- input redirection (`<`)
- here-documents

A line that contains `|` anywhere is treated as a pipeline, even when the `|`
is inside quotes.