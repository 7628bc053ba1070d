"""Running one command: a built-in, or an external program."""

from collections.abc import Sequence

from .builtins import is_builtin, run_builtin
from .environment import Environment
from .executor import exec_cmd_args, exec_cmd_args_nofork
from .history import History


def _require_args(args: Sequence[str] | None) -> None:
    if not args:
        raise ValueError("a non-empty argument vector is required")


def run_command(args: Sequence[str], env: Environment,
                history: History | None = None) -> int:
    """Run a built-in in the shell, or an external program as a child."""
    _require_args(args)
    if is_builtin(args[0]):
        return run_builtin(args, env, history)
    return exec_cmd_args(args, env)


def run_command_nofork(args: Sequence[str], env: Environment,
                       history: History | None = None) -> int:
    """Run a built-in in the shell, or replace the shell with an external program."""
    _require_args(args)
    if is_builtin(args[0]):
        return run_builtin(args, env, history)
    return exec_cmd_args_nofork(args, env)