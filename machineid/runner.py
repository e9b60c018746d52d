from __future__ import annotations

import asyncio
import contextlib
import os
import signal
import subprocess
from dataclasses import dataclass
from typing import Any

from machineid.errors import CommandExecutionError
from machineid.platforms import PlatformCommand
from machineid.utils.logging import get_logger

logger = get_logger()


@dataclass(frozen=True)
class CommandOutput:
    command: str
    returncode: int
    stdout: str
    stderr: str = ""


def _decode(payload: bytes | None) -> str:
    if not payload:
        return ""
    return payload.decode("utf-8", errors="replace")


def _spawn_kwargs(spec: PlatformCommand) -> dict[str, Any]:
    if spec.hide_window and os.name == "nt":
        return {"creationflags": getattr(subprocess, "CREATE_NO_WINDOW", 0x08000000)}
    return {}


def _session_kwargs() -> dict[str, Any]:
    # own process group so a timeout can kill everything the shell started
    if os.name == "posix":
        return {"start_new_session": True}
    return {}


def _kill(process: asyncio.subprocess.Process) -> None:
    with contextlib.suppress(ProcessLookupError):
        if os.name == "posix":
            os.killpg(process.pid, signal.SIGKILL)
        else:
            process.kill()


def _check_output(spec: PlatformCommand, returncode: int, stdout: str, stderr: str) -> CommandOutput:
    if returncode < 0:
        raise CommandExecutionError(
            spec.command,
            f"command {spec.command!r} was terminated by signal {-returncode}",
            returncode=returncode,
            stderr=stderr,
        )
    if returncode != 0:
        detail = f"command {spec.command!r} exited with code {returncode}"
        if stderr.strip():
            detail = f"{detail}: {stderr.strip()}"
        raise CommandExecutionError(spec.command, detail, returncode=returncode, stderr=stderr)
    return CommandOutput(command=spec.command, returncode=returncode, stdout=stdout, stderr=stderr)


def run_command(spec: PlatformCommand, timeout: float | None = None) -> CommandOutput:
    args: str | list[str] = spec.command if spec.uses_shell else list(spec.argv or ())
    logger.debug("running command platform={} shell={}", spec.platform, spec.uses_shell)
    try:
        completed = subprocess.run(
            args,
            shell=spec.uses_shell,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            timeout=timeout,
            check=False,
            **_spawn_kwargs(spec),
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandExecutionError(
            spec.command,
            f"command {spec.command!r} timed out after {timeout} seconds",
            stderr=_decode(exc.stderr),
        ) from exc
    except OSError as exc:
        raise CommandExecutionError(
            spec.command, f"failed to start command {spec.command!r}: {exc}"
        ) from exc

    return _check_output(spec, completed.returncode, _decode(completed.stdout), _decode(completed.stderr))


async def _spawn(spec: PlatformCommand) -> asyncio.subprocess.Process:
    if spec.uses_shell:
        return await asyncio.create_subprocess_shell(
            spec.command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            **_spawn_kwargs(spec),
            **_session_kwargs(),
        )
    return await asyncio.create_subprocess_exec(
        *(spec.argv or ()),
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        **_spawn_kwargs(spec),
        **_session_kwargs(),
    )


async def run_command_async(spec: PlatformCommand, timeout: float | None = None) -> CommandOutput:
    logger.debug("running command async platform={} shell={}", spec.platform, spec.uses_shell)
    try:
        process = await _spawn(spec)
    except OSError as exc:
        raise CommandExecutionError(
            spec.command, f"failed to start command {spec.command!r}: {exc}"
        ) from exc

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        _kill(process)
        await process.wait()
        raise CommandExecutionError(
            spec.command,
            f"command {spec.command!r} timed out after {timeout} seconds",
        ) from exc

    returncode = await process.wait()
    return _check_output(spec, returncode, _decode(stdout), _decode(stderr))
