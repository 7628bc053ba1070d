"""The shell's built-in commands: cd, env, setenv, unsetenv, exit and history."""

import os
import sys
from collections.abc import Sequence

from .environment import Environment
from .exit_parse import ExitSyntaxError, parse_exit_code
from .history import History
from .strutils import split_words, write_err

FAILURE = 84

_BUILTIN_NAMES = frozenset({"cd", "env", "setenv", "unsetenv", "exit", "history"})


class ShellExit(SystemExit):
    """Raised by ``exit`` to leave the shell with the given status."""

    def __init__(self, code: int) -> None:
        super().__init__(code)


def _require_env(env: Environment | None) -> None:
    if env is None:
        raise ValueError("an environment is required")


def _require_args(args: Sequence[str] | None) -> None:
    if not args:
        raise ValueError("a non-empty argument vector is required")


def is_builtin(cmd: str | None) -> bool:
    """Return True if ``cmd`` names a built-in command."""
    return cmd in _BUILTIN_NAMES


def change_directory(path: str, env: Environment) -> int:
    """Change the working directory to ``path`` and update PWD and OLDPWD."""
    if not os.access(path, os.F_OK):
        write_err(f"{path}: No such file or directory.\n")
        return FAILURE
    if not os.access(path, os.R_OK):
        write_err(f"{path}: Permission denied.\n")
        return FAILURE
    if not os.path.isdir(path):
        write_err(f"{path}: Not a directory.\n")
        return FAILURE
    pwd = env.get("PWD")
    if not pwd:
        return FAILURE
    env.set("OLDPWD", pwd)
    try:
        os.chdir(path)
        new_pwd = os.getcwd()
    except OSError:
        return FAILURE
    if not new_pwd:
        return FAILURE
    env.set("PWD", new_pwd)
    return 0


def _home_path(env: Environment) -> str | None:
    home = env.get("HOME")
    if not home:
        return None
    if home.startswith("/"):
        return home
    try:
        cwd = os.getcwd()
    except OSError:
        return None
    return f"{cwd}/{home}"


def chdir_home(env: Environment) -> int:
    """Change to the directory named by HOME, relative to the cwd if needed."""
    path = _home_path(env)
    if path is None:
        return FAILURE
    return change_directory(path, env)


def expand_tilde_path(arg: str | None, env: Environment) -> str | None:
    """Expand a leading ``~`` or ``~/`` to HOME; other paths are returned as is.

    Returns None when ``arg`` is None or HOME is needed but unset or empty.
    """
    if arg is None:
        return None
    if not arg.startswith("~"):
        return arg
    if len(arg) > 1 and arg[1] != "/":
        return arg
    base = _home_path(env)
    if base is None:
        return None
    return base + arg[1:]


def _change_to_oldpwd(env: Environment) -> int:
    oldpwd = env.get("OLDPWD")
    if oldpwd is None:
        return FAILURE
    return change_directory(oldpwd, env)


def cd_builtin(args: Sequence[str], env: Environment) -> int:
    """Run ``cd [dir | - | ~...]``."""
    _require_args(args)
    _require_env(env)
    if len(args) == 1:
        return chdir_home(env)
    if len(args) > 2:
        return FAILURE
    if args[1] == "-":
        return _change_to_oldpwd(env)
    path = expand_tilde_path(args[1], env)
    if path is None:
        return FAILURE
    return change_directory(path, env)


def env_builtin(args: Sequence[str], env: Environment | None) -> int:
    """Print every environment entry, one per line."""
    if args is None or len(args) != 1 or env is None:
        return FAILURE
    sys.stdout.write("".join(f"{entry}\n" for entry in env))
    sys.stdout.flush()
    return 0


def setenv_builtin(args: Sequence[str], env: Environment) -> int:
    """Run ``setenv [NAME [VALUE]]``; with no name, print the environment."""
    _require_args(args)
    _require_env(env)
    if len(args) == 1:
        return env_builtin(args, env)
    if len(args) > 3:
        write_err("setenv: Too many arguments.\n")
        return FAILURE
    if len(args) == 2:
        env.set_from_arg(args[1])
        return 0
    env.set(args[1], args[2])
    return 0


def unsetenv_builtin(args: Sequence[str], env: Environment) -> int:
    """Run ``unsetenv NAME...``."""
    _require_env(env)
    if args is None or len(args) < 2:
        return FAILURE
    for name in args[1:]:
        env.unset(name)
    return 0


def unsetenv_words(arg: str, env: Environment) -> int:
    """Remove every variable named in the blank-separated string ``arg``."""
    if arg is None:
        raise ValueError("an argument string is required")
    _require_env(env)
    names = split_words(arg, " ")
    if not names:
        return FAILURE
    for name in names:
        env.unset(name)
    return 0


def exit_builtin(args: Sequence[str]) -> int:
    """Run ``exit [code]``: raise ShellExit, or return 84 on a bad argument."""
    _require_args(args)
    if len(args) == 1:
        raise ShellExit(0)
    if len(args) > 2:
        return FAILURE
    try:
        code = parse_exit_code(args[1])
    except ExitSyntaxError:
        return FAILURE
    raise ShellExit(code)


def history_builtin(args: Sequence[str], history: History | None) -> int:
    """Print the numbered history."""
    if not args or len(args) != 1:
        return FAILURE
    if history is None:
        return 0
    sys.stdout.write(
        "".join(f"{number}\t{line}\n" for number, line in enumerate(history, start=1))
    )
    sys.stdout.flush()
    return 0


def run_builtin(args: Sequence[str], env: Environment,
                history: History | None) -> int:
    """Run the built-in named by ``args[0]`` and return its status."""
    _require_args(args)
    _require_env(env)
    name = args[0]
    if name == "cd":
        return cd_builtin(args, env)
    if name == "env":
        return env_builtin(args, env)
    if name == "setenv":
        return setenv_builtin(args, env)
    if name == "unsetenv":
        return unsetenv_builtin(args, env)
    if name == "exit":
        return exit_builtin(args)
    if name == "history":
        return history_builtin(args, history)
    return 0