"""Test execution runner."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from monopub.errors import ExecutionError, RegistryError
from monopub.execution.runner import run_command, run_command_checked


def _process(returncode: int, stdout: list[bytes], stderr: list[bytes]) -> AsyncMock:
    process = AsyncMock()
    process.returncode = returncode
    process.wait.return_value = None
    process.stdout = AsyncMock()
    process.stdout.readline.side_effect = [*stdout, b""]
    process.stderr = AsyncMock()
    process.stderr.readline.side_effect = [*stderr, b""]
    return process


@pytest.mark.asyncio
async def test_run_command_success():
    with patch("asyncio.create_subprocess_shell") as mock_create:
        mock_create.return_value = _process(0, [b"stdout\n"], [b"stderr\n"])

        exit_code, stdout, stderr, duration = await run_command(
            "echo test", cwd=Path("."), timeout=1.0
        )

        assert exit_code == 0
        assert stdout == "stdout\n"
        assert stderr == "stderr\n"
        assert duration >= 0
        assert mock_create.call_args.kwargs["cwd"] == "."


@pytest.mark.asyncio
async def test_run_command_env_merged(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MONOPUB_TEST_OUTER", "outer")

    with patch("asyncio.create_subprocess_shell") as mock_create:
        mock_create.return_value = _process(0, [], [])

        await run_command("env", cwd=Path("."), env={"NPM_CONFIG_REGISTRY": "http://localhost"})

        env = mock_create.call_args.kwargs["env"]
        assert env["NPM_CONFIG_REGISTRY"] == "http://localhost"
        assert env["MONOPUB_TEST_OUTER"] == "outer"


@pytest.mark.asyncio
async def test_run_command_timeout():
    with patch("asyncio.create_subprocess_shell") as mock_create:
        process = _process(0, [], [])
        # kill is synchronous method
        process.kill = MagicMock()
        mock_create.return_value = process

        with patch("asyncio.wait_for", side_effect=asyncio.TimeoutError):
            exit_code, stdout, stderr, duration = await run_command(
                "sleep 10", cwd=Path("."), timeout=0.1
            )

            assert exit_code == -1
            assert "timed out" in stderr
            process.kill.assert_called_once()
            process.wait.assert_awaited_once()


@pytest.mark.asyncio
async def test_run_command_callbacks():
    stdout_cb = MagicMock()
    stderr_cb = MagicMock()

    with patch("asyncio.create_subprocess_shell") as mock_create:
        mock_create.return_value = _process(0, [b"out\n"], [b"err\n"])

        await run_command("cmd", cwd=Path("."), on_stdout=stdout_cb, on_stderr=stderr_cb)

        stdout_cb.assert_called_with("out")
        stderr_cb.assert_called_with("err")


@pytest.mark.asyncio
async def test_run_command_error():
    with patch("asyncio.create_subprocess_shell") as mock_create:
        mock_create.return_value = _process(1, [], [b"error\n"])

        exit_code, stdout, stderr, duration = await run_command("fail", cwd=Path("."))

        assert exit_code == 1
        assert "error" in stderr


@pytest.mark.asyncio
async def test_run_command_exception():
    with patch("asyncio.create_subprocess_shell", side_effect=ValueError("Boom")):
        exit_code, stdout, stderr, duration = await run_command("fail", cwd=Path("."))

        assert exit_code == -1
        assert "Boom" in stderr


@pytest.mark.asyncio
async def test_run_command_cancelled():
    with patch("asyncio.create_subprocess_shell", side_effect=asyncio.CancelledError):
        with pytest.raises(asyncio.CancelledError):
            await run_command("npm view lib", cwd=Path("."))


@pytest.mark.asyncio
async def test_run_command_real_shell(tmp_path: Path):
    exit_code, stdout, _, _ = await run_command("echo hello", cwd=tmp_path)

    assert exit_code == 0
    assert stdout.strip() == "hello"


@pytest.mark.asyncio
async def test_run_command_checked_returns_stdout():
    with patch("monopub.execution.runner.run_command", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = (0, "ok\n", "", 10)

        assert await run_command_checked("cmd", Path("."), timeout=5) == "ok\n"
        assert mock_run.call_args.kwargs["timeout"] == 5


@pytest.mark.asyncio
async def test_run_command_checked_raises():
    with patch("monopub.execution.runner.run_command", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = (2, "", "  boom \n", 10)

        with pytest.raises(ExecutionError) as exc_info:
            await run_command_checked("cmd", Path("."))

    error = exc_info.value
    assert error.message == "cmd failed [2]: boom"
    assert error.exit_code == 2
    assert error.command == "cmd"


@pytest.mark.asyncio
async def test_run_command_checked_error_type():
    with patch("monopub.execution.runner.run_command", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = (1, "only stdout", "", 10)

        with pytest.raises(RegistryError, match="only stdout"):
            await run_command_checked("cmd", Path("."), error_type=RegistryError)


@pytest.mark.asyncio
async def test_run_command_checked_forwards_callbacks():
    stdout_cb = MagicMock()
    stderr_cb = MagicMock()

    with patch("monopub.execution.runner.run_command", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = (0, "", "", 10)

        await run_command_checked("cmd", Path("."), on_stdout=stdout_cb, on_stderr=stderr_cb)

    assert mock_run.call_args.kwargs["on_stdout"] is stdout_cb
    assert mock_run.call_args.kwargs["on_stderr"] is stderr_cb


@pytest.mark.asyncio
async def test_run_command_checked_streams_real_output(tmp_path: Path):
    lines: list[str] = []

    stdout = await run_command_checked(
        "echo one; echo two", tmp_path, on_stdout=lines.append
    )

    assert lines == ["one", "two"]
    assert stdout == "one\ntwo\n"
