"""Launching external commands, either as children or in place of the shell."""

import os
import signal
import sys
from collections.abc import Sequence

from .environment import Environment
from .strutils import split_words, write_err

FAILURE = 84
_SEGFAULT_STATUS = 139


def _flush_std_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


def _is_path_like(cmd: str) -> bool:
    return cmd.startswith(("/", "."))


def _not_found(cmd: str) -> None:
    write_err(f"{cmd}: Command not found.\n")


def check_cmd(cmd: str) -> bool:
    """Check that an explicit path names an executable file, reporting why not.

    Commands that are not paths are always accepted here; they are looked up
    in PATH later.
    """
    if _is_path_like(cmd):
        if not os.access(cmd, os.F_OK):
            _not_found(cmd)
            return False
        if not os.access(cmd, os.X_OK):
            write_err(f"{cmd}: Permission denied.\n")
            return False
    return True


def can_exec(path: str) -> bool:
    """Return True if ``path`` exists and is executable."""
    return os.access(path, os.F_OK) and os.access(path, os.X_OK)


def make_full_cmd(path: str, cmd: str) -> str:
    """Join a PATH directory and a command name."""
    return f"{path}/{cmd}"


def build_args(cmd: str, args: Sequence[str] | None) -> list[str]:
    """Build an argument vector with ``cmd`` first, followed by ``args``."""
    return [cmd, *(args or ())]


def signal_status(returncode: int) -> int:
    """Report a segmentation fault for the wait status ``returncode``.

    Returns 139 when the child died of SIGSEGV, 0 otherwise.
    """
    if os.WIFSIGNALED(returncode) and os.WTERMSIG(returncode) == signal.SIGSEGV:
        message = "Segmentation fault"
        if os.WCOREDUMP(returncode):
            message += " (core dumped)"
        write_err(message + "\n")
        return _SEGFAULT_STATUS
    return 0


def run_process(cmd: str, argv: Sequence[str], env: Environment) -> int:
    """Run ``cmd`` with ``argv`` in a child process and return its exit status.

    A child that cannot execute the program exits with status 1.
    """
    variables = env.to_dict()
    arguments = list(argv)
    _flush_std_streams()
    try:
        pid = os.fork()
    except OSError:
        return FAILURE
    if pid == 0:
        try:
            os.execve(cmd, arguments, variables)
        finally:
            os._exit(1)
    _, status = os.waitpid(pid, 0)
    if signal_status(status) != 0:
        return _SEGFAULT_STATUS
    return os.WEXITSTATUS(status)


def _replace_process(cmd: str, argv: Sequence[str], env: Environment) -> int:
    """Replace the current process with ``cmd``; returns only on failure."""
    argv = list(argv)
    if not can_exec(cmd):
        return FAILURE
    _flush_std_streams()
    try:
        os.execve(cmd, argv, env.to_dict())
    except OSError:
        pass
    return FAILURE


def _words(arg: str | None) -> list[str]:
    return [] if arg is None else split_words(arg, " ")


def exec_launch_format_arg(cmd: str, arg: str | None, env: Environment) -> int:
    """Run an explicit path with a space-separated argument string."""
    argv = build_args(cmd, _words(arg))
    if not can_exec(cmd):
        return FAILURE
    return run_process(cmd, argv, env)


def _path_dirs(env: Environment) -> list[str] | None:
    path_env = env.get("PATH")
    if path_env is None:
        return None
    return split_words(path_env, ":")


def _run_from_dir(directory: str, cmd: str, rest: list[str],
                  env: Environment) -> int | None:
    full_cmd = make_full_cmd(directory, cmd)
    if not can_exec(full_cmd):
        return None
    return run_process(full_cmd, build_args(full_cmd, rest), env)


def _search_and_run(cmd: str, rest: list[str], env: Environment,
                    dirs: list[str]) -> int | None:
    for directory in dirs:
        status = _run_from_dir(directory, cmd, rest, env)
        if status is not None:
            return status
    return None


def exec_path_env(cmd: str, arg: str | None, env: Environment) -> int:
    """Look ``cmd`` up in PATH and run it with a space-separated argument string.

    Returns 84 when there is no PATH, and 0 after reporting a command that
    was not found.
    """
    dirs = _path_dirs(env)
    if dirs is None:
        return FAILURE
    status = _search_and_run(cmd, _words(arg), env, dirs)
    if status is None:
        _not_found(cmd)
        return 0
    return status


def exec_cmd(cmd: str, arg: str | None, env: Environment) -> int:
    """Run ``cmd`` with a space-separated argument string."""
    if cmd is None or env is None:
        raise ValueError("a command and an environment are required")
    if not check_cmd(cmd):
        return 1
    if _is_path_like(cmd):
        return exec_launch_format_arg(cmd, arg, env)
    return exec_path_env(cmd, arg, env)


def _require_args(args: Sequence[str] | None, env: Environment | None) -> None:
    if not args or env is None:
        raise ValueError("a non-empty argument vector and an environment are required")


def exec_cmd_args(args: Sequence[str], env: Environment) -> int:
    """Run the argument vector ``args`` in a child process and return its status."""
    _require_args(args, env)
    cmd, rest = args[0], list(args[1:])
    if not check_cmd(cmd):
        return 1
    if _is_path_like(cmd):
        if not can_exec(cmd):
            return FAILURE
        return run_process(cmd, build_args(cmd, rest), env)
    dirs = _path_dirs(env)
    if dirs is None:
        _not_found(cmd)
        return 1
    status = _search_and_run(cmd, rest, env, dirs)
    if status is None:
        _not_found(cmd)
        return 1
    return status


def exec_cmd_args_nofork(args: Sequence[str], env: Environment) -> int:
    """Replace the current process with the command in ``args``.

    Returns only when no program could take over: 1 for a bad explicit path,
    84 when execution failed or there is no PATH, and 0 otherwise.
    """
    _require_args(args, env)
    cmd, rest = args[0], list(args[1:])
    if not check_cmd(cmd):
        return 1
    if _is_path_like(cmd):
        return _replace_process(cmd, build_args(cmd, rest), env)
    dirs = _path_dirs(env)
    if dirs is None:
        _not_found(cmd)
        return FAILURE
    found = False
    for directory in dirs:
        full_cmd = make_full_cmd(directory, cmd)
        if can_exec(full_cmd):
            _replace_process(full_cmd, build_args(full_cmd, rest), env)
            found = True
    if not found:
        _not_found(cmd)
    return 0