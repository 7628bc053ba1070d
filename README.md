# minitcsh

Building blocks for a small tcsh-style shell, as a POSIX-only Python library:

- `minitcsh.environment` – an ordered `Environment` of `KEY=VALUE` entries
- `minitcsh.builtins` – the `cd`, `env`, `setenv`, `unsetenv`, `exit` and
  `history` builtins
- `minitcsh.executor` – `PATH` lookup and execution of external programs
- `minitcsh.commands` – runs one argument vector, builtin or external
- `minitcsh.exit_parse` – parsing of `exit` arguments and bare `exit` lines
- `minitcsh.history` – command history with `!!`, `!N` and `!prefix` expansion
- `minitcsh.line_editor` – a line editor with up/down history browsing
- `minitcsh.strutils` – small string helpers (`split_words`, `compare`, ...)

## Environment

```python
from minitcsh.environment import Environment

env = Environment(["PATH=/bin:/usr/bin", "HOME=/tmp"])
env.set("EDITOR", "vi")
env.set_from_arg("PAGER=less")   # a bare "NAME" sets an empty value
env.unset("HOME")

env.get("EDITOR")      # "vi"
env.get("HOME")        # None
env.to_dict()          # {"PATH": "/bin:/usr/bin", "EDITOR": "vi", "PAGER": "less"}
```

`set` replaces an existing entry in place, otherwise appends one. Iterating
over an `Environment` yields its `KEY=VALUE` strings in order.

## Running commands

`run_command` runs a builtin inside the current process when the name is one,
otherwise it starts the program as a child and returns its exit status.

```python
from minitcsh.commands import run_command
from minitcsh.history import History

status = run_command(["env"], env, History())
status = run_command(["ls", "-l"], env, History())
```

A name starting with `/` or `.` is run as given; a missing or non-executable
file is reported on standard error (`<name>: Command not found.` or
`<name>: Permission denied.`) and gives status 1. Other names are searched in
the directories of `PATH`. A child killed by `SIGSEGV` prints
`Segmentation fault` (with ` (core dumped)` when applicable) and yields 139.

`run_command_nofork` and `executor.exec_cmd_args_nofork` instead replace the
current process with the program, returning only when none could take over.
`executor.exec_cmd` takes a command name and a space-separated argument string.

An empty argument vector raises `ValueError`.

## Builtins

```python
from minitcsh.builtins import cd_builtin, expand_tilde_path, is_builtin

is_builtin("cd")                                # True
expand_tilde_path("~/docs", Environment(["HOME=/home/user"]))
# "/home/user/docs"
cd_builtin(["cd", "-"], env)                    # back to $OLDPWD
```

`cd` updates `PWD` and `OLDPWD`; it needs `PWD` to be set. A relative `HOME`
is taken relative to the current directory. Builtins return 0 on success and
84 on failure.

`exit` raises `ShellExit` (a `SystemExit`) carrying the exit code, so the
caller decides how to leave:

```python
from minitcsh.builtins import ShellExit, exit_builtin

try:
    exit_builtin(["exit", "42"])
except ShellExit as stop:
    print(stop.code)    # 42
```

## Exit parsing

```python
from minitcsh.exit_parse import parse_exit_code, parse_exit_line

parse_exit_code("42")         # 42
parse_exit_code("-5")         # 251
parse_exit_line("  exit   7") # 7
parse_exit_line("echo test")  # None
```

A malformed argument raises `ExitSyntaxError`; for `parse_exit_line`, a line
such as `exit 1 2` also prints `exit: Expression Syntax.` on standard error.

## History

```python
from minitcsh.history import EventNotFound, History

history = History()
history.add("ls -l")
history.add("echo hello")

history.expand_line("!!")     # "echo hello"
history.expand_line("!1")     # "ls -l"
history.expand_line("!ec")    # "echo hello"

try:
    history.expand_line("!nope")
except EventNotFound as error:
    print(error)              # nope: event not found
```

## Interactive input

`line_editor.interactive_getline(history)` switches the terminal to
non-canonical mode without echo, shows the `$> ` prompt and lets the user edit
a line, browsing history with the up and down arrow keys. It returns the line,
`None` for an empty or interrupted line, and raises `EOFError` at end of
input. `LineEditor` holds the same logic with pluggable `read_char` and
`write` callables, so it can be driven without a terminal.
`handle_sigint` can be installed as a `SIGINT` handler to redraw the prompt.

## What this package does not do

There is no shell program or read–eval loop to run, and no command line entry
point. Lines are not tokenized or parsed: pipes, redirections, `;`, `&&`, `||`
and quoting are not handled. The caller splits input into argument vectors and
ties the pieces together.

## Tests

```
pip install -e .[test]
pytest
```