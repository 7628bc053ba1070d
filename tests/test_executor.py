import os
import sys

import pytest

from minitcsh.environment import Environment
from minitcsh.executor import (
    build_args,
    can_exec,
    check_cmd,
    exec_cmd,
    exec_cmd_args,
    exec_cmd_args_nofork,
    exec_launch_format_arg,
    exec_path_env,
    make_full_cmd,
    run_process,
    signal_status,
)


def _script(directory, name, body):
    path = directory / name
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(0o755)
    return str(path)


@pytest.fixture
def env():
    return Environment(["PATH=/bin:/usr/bin"])


def test_build_args_without_args():
    assert build_args("ls", None) == ["ls"]


def test_build_args_with_args():
    assert build_args("ls", ["-l", "/tmp"]) == ["ls", "-l", "/tmp"]
    assert build_args("ls", ["-a", "."]) == ["ls", "-a", "."]


def test_make_full_cmd_joins():
    assert make_full_cmd("/bin", "ls") == "/bin/ls"


def test_can_exec_missing():
    assert can_exec("/no/such/file") is False


def test_can_exec_executable_file(tmp_path):
    path = tmp_path / "prog"
    path.write_text("")
    path.chmod(0o755)
    assert can_exec(str(path)) is True


def test_can_exec_plain_file(tmp_path):
    path = tmp_path / "data"
    path.write_text("")
    path.chmod(0o644)
    assert can_exec(str(path)) is False


def test_check_cmd_missing_reports(capsys):
    assert check_cmd("/no/such/cmd") is False
    assert capsys.readouterr().err == "/no/such/cmd: Command not found.\n"


def test_check_cmd_permission_denied(tmp_path, capsys):
    path = tmp_path / "data"
    path.write_text("")
    path.chmod(0o644)
    assert check_cmd(str(path)) is False
    assert capsys.readouterr().err == f"{path}: Permission denied.\n"


def test_check_cmd_bare_name_accepted(capsys):
    assert check_cmd("not_a_real_cmd") is True
    assert capsys.readouterr().err == ""


def test_signal_status_non_signal():
    assert signal_status(0) == 0


def test_signal_status_segv_raw(capsys):
    assert signal_status(11) == 139
    assert capsys.readouterr().err == "Segmentation fault\n"


def test_signal_status_segv_core(capsys):
    assert signal_status(11 | 0x80) == 139
    assert capsys.readouterr().err == "Segmentation fault (core dumped)\n"


def test_run_process_segfault(capsys):
    code = "import os, signal; os.kill(os.getpid(), signal.SIGSEGV)"
    status = run_process(sys.executable, [sys.executable, "-c", code],
                         Environment([]))
    assert status == 139
    assert capsys.readouterr().err.startswith("Segmentation fault")


def test_run_process_success(tmp_path, env):
    script = _script(tmp_path, "ok", "exit 0")
    assert run_process(script, [script], env) == 0


def test_run_process_exit_status(tmp_path, env):
    script = _script(tmp_path, "five", "exit 5")
    assert run_process(script, [script], env) == 5


def test_run_process_passes_environment(tmp_path):
    script = _script(tmp_path, "envcheck", '[ "$GREETING" = hello ] && exit 7; exit 1')
    assert run_process(script, [script], Environment(["GREETING=hello"])) == 7


def test_run_process_missing_binary_returns_1(env):
    assert run_process("/no/such/cmd", ["/no/such/cmd"], env) == 1


def test_exec_cmd_absolute_success(tmp_path, env):
    script = _script(tmp_path, "ok", "exit 0")
    assert exec_cmd(script, None, env) == 0


def test_exec_cmd_absolute_missing_returns_1(env, capsys):
    assert exec_cmd("/no/such/cmd", None, env) == 1
    assert capsys.readouterr().err == "/no/such/cmd: Command not found.\n"


def test_exec_cmd_rejects_none(env):
    with pytest.raises(ValueError):
        exec_cmd(None, None, env)
    with pytest.raises(ValueError):
        exec_cmd("ls", None, None)


def test_exec_cmd_via_path(tmp_path):
    _script(tmp_path, "counter", "exit $#")
    assert exec_cmd("counter", "a b", Environment([f"PATH={tmp_path}"])) == 2


def test_exec_launch_format_arg_success(tmp_path, env):
    script = _script(tmp_path, "counter", "exit $#")
    assert exec_launch_format_arg(script, None, env) == 0
    assert exec_launch_format_arg(script, "ok", env) == 1
    assert exec_launch_format_arg(script, "a \tb  c", env) == 3


def test_exec_launch_format_arg_missing(env):
    assert exec_launch_format_arg("/no/such/cmd", "hello world", env) == 84
    assert exec_launch_format_arg("/no/such/cmd", None, env) == 84


def test_exec_path_env_missing_path_returns_84():
    assert exec_path_env("ls", None, Environment(["HOME=/tmp"])) == 84


def test_exec_path_env_not_found_message(capsys):
    env = Environment(["PATH=/definitely_not_here_1:/definitely_not_here_2"])
    assert exec_path_env("not_a_real_cmd", None, env) == 0
    assert capsys.readouterr().err == "not_a_real_cmd: Command not found.\n"


def test_exec_path_env_runs_found(tmp_path):
    _script(tmp_path, "counter", "exit $#")
    env = Environment([f"PATH=/definitely_not_here:{tmp_path}"])
    assert exec_path_env("counter", "x y z", env) == 3


def test_exec_cmd_args_null_inputs(env):
    with pytest.raises(ValueError):
        exec_cmd_args(None, env)
    with pytest.raises(ValueError):
        exec_cmd_args_nofork(None, env)
    with pytest.raises(ValueError):
        exec_cmd_args([], env)
    with pytest.raises(ValueError):
        exec_cmd_args_nofork([], env)
    with pytest.raises(ValueError):
        exec_cmd_args(["ls"], None)
    with pytest.raises(ValueError):
        exec_cmd_args_nofork(["ls"], None)


def test_exec_cmd_args_absolute_success(tmp_path, env):
    script = _script(tmp_path, "ok", "exit 0")
    assert exec_cmd_args([script], env) == 0


def test_exec_cmd_args_passes_arguments(tmp_path, env):
    script = _script(tmp_path, "counter", "exit $#")
    assert exec_cmd_args([script, "one", "two words"], env) == 2


def test_exec_cmd_args_missing_paths(env, capsys):
    assert exec_cmd_args(["/no/such/cmd"], env) == 1
    assert exec_cmd_args(["./no/such/cmd"], env) == 1
    assert exec_cmd_args_nofork(["/no/such/cmd"], env) == 1
    assert exec_cmd_args_nofork(["./no/such/cmd"], env) == 1
    assert capsys.readouterr().err.count("Command not found.") == 4


def test_exec_cmd_args_not_found_modes(capsys):
    args = ["not_a_real_cmd"]
    env_no_path = Environment(["HOME=/tmp"])
    env_bad_path = Environment(
        ["PATH=/definitely_missing_1:/definitely_missing_2"])
    assert exec_cmd_args(args, env_no_path) == 1
    assert exec_cmd_args(args, env_bad_path) == 1
    assert exec_cmd_args_nofork(args, env_no_path) == 84
    assert exec_cmd_args_nofork(args, env_bad_path) == 0
    assert capsys.readouterr().err == "not_a_real_cmd: Command not found.\n" * 4


def test_exec_cmd_args_via_path(tmp_path):
    _script(tmp_path, "counter", "exit $#")
    env = Environment([f"PATH={tmp_path}"])
    assert exec_cmd_args(["counter", "a", "b"], env) == 2


def test_fork_directory_execve_fails(tmp_path, env):
    assert exec_cmd_args([str(tmp_path)], env) == 1


def test_nofork_directory_execve_fails(tmp_path, env):
    assert exec_cmd_args_nofork([str(tmp_path)], env) == 84


def test_nofork_found_directory_execve_fails(tmp_path):
    directory = tmp_path / "ms_nofork_dir"
    directory.mkdir()
    env = Environment([f"PATH={tmp_path}"])
    assert exec_cmd_args_nofork([directory.name], env) == 0
    assert os.path.isdir(directory)