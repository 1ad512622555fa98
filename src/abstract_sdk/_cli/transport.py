"""CLI transport: runs the local Abstract executable as a child process."""

from __future__ import annotations

import abc
import contextlib
import json
import logging
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import anyio
from anyio.abc import ByteReceiveStream

from .._core.config import TOKEN_ENV, TransportConfig
from .._core.envelope import ResponseEnvelope, ResponseMeta
from .._core.operation import OperationDescriptor
from ..errors import (
    ConfigurationError,
    MalformedResponse,
    ProcessExitError,
    ProcessSpawnError,
    ProcessTimeoutError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompletedCommand:
    args: Sequence[str]
    returncode: int
    stdout: bytes
    stderr: bytes


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class BaseCLITransport(abc.ABC):
    """Shared command construction and result mapping for the CLI transports."""

    def __init__(self, config: TransportConfig) -> None:
        self._config = config

    @abc.abstractmethod
    async def _run(
        self,
        command: list[str],
        *,
        env: dict[str, str],
        timeout: float | None,
    ) -> CompletedCommand:
        """Run ``command`` to completion, raising spawn/timeout errors."""
        ...

    def build_command(self, args: Sequence[str]) -> list[str]:
        if not self._config.cli_executable_path:
            raise ConfigurationError("CLI transport used without cli_executable_path")
        return [self._config.cli_executable_path, *args]

    def build_env(self) -> dict[str, str]:
        env = {**os.environ, **self._config.cli_env}
        if self._config.auth_token:
            env[TOKEN_ENV] = self._config.auth_token
        return env

    async def send(
        self,
        operation: OperationDescriptor,
        *,
        timeout: float | None = None,
    ) -> ResponseEnvelope:
        """Execute ``operation.cli_args`` and return the parsed stdout."""
        if operation.cli_args is None:
            raise ConfigurationError(
                f"{operation.method} {operation.path} has no CLI form"
            )
        command = self.build_command(operation.cli_args)
        effective_timeout = timeout if timeout is not None else self._config.cli_timeout

        logger.debug("Running %s", command)
        completed = await self._run(command, env=self.build_env(), timeout=effective_timeout)
        logger.debug("%s exited with %s", command[0], completed.returncode)
        return self._to_envelope(completed)

    def _to_envelope(self, completed: CompletedCommand) -> ResponseEnvelope:
        if completed.returncode != 0:
            stderr = _decode_text(completed.stderr)
            raise ProcessExitError(
                f"CLI exited with code {completed.returncode}: {stderr.strip()[:500]}",
                exit_code=completed.returncode,
                stderr=stderr,
            )

        data: Any = None
        if completed.stdout.strip():
            try:
                data = json.loads(completed.stdout)
            except ValueError as exc:
                raise MalformedResponse(
                    f"CLI stdout was not valid JSON: {exc}", raw=completed.stdout
                ) from exc

        return ResponseEnvelope(
            data=data,
            meta=ResponseMeta(transport="cli", exit_code=completed.returncode),
        )


class BlockingCLITransport(BaseCLITransport):
    """
    Synchronous CLI transport using subprocess.run.

    ``communicate`` drains stdout and stderr together, so chatty children
    cannot fill a pipe and deadlock. Declared async but never suspends, for
    use with run_blocking().
    """

    async def _run(
        self,
        command: list[str],
        *,
        env: dict[str, str],
        timeout: float | None,
    ) -> CompletedCommand:
        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                cwd=self._config.cli_cwd,
                env=env,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ProcessTimeoutError(
                f"CLI did not exit within {timeout}s",
                timeout=timeout or 0.0,
                stderr=_decode_text(exc.stderr or b""),
            ) from exc
        except OSError as exc:
            raise ProcessSpawnError(f"Could not start {command[0]}", exc) from exc
        return CompletedCommand(command, result.returncode, result.stdout, result.stderr)


async def _drain(stream: ByteReceiveStream, sink: bytearray) -> None:
    async for chunk in stream:
        sink.extend(chunk)


class AsyncCLITransport(BaseCLITransport):
    """Asynchronous CLI transport using anyio processes.

    stdout and stderr are read by two concurrent tasks while the child runs;
    the exit code is awaited once both streams hit EOF. If the deadline passes
    or the awaiting task is cancelled the child is killed.
    """

    async def _run(
        self,
        command: list[str],
        *,
        env: dict[str, str],
        timeout: float | None,
    ) -> CompletedCommand:
        try:
            process = await anyio.open_process(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=self._config.cli_cwd,
                env=env,
            )
        except OSError as exc:
            raise ProcessSpawnError(f"Could not start {command[0]}", exc) from exc

        stdout = bytearray()
        stderr = bytearray()
        async with process:
            assert process.stdout is not None and process.stderr is not None
            try:
                with anyio.fail_after(timeout):
                    async with anyio.create_task_group() as tg:
                        tg.start_soon(_drain, process.stdout, stdout)
                        tg.start_soon(_drain, process.stderr, stderr)
                    returncode = await process.wait()
            except TimeoutError as exc:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                raise ProcessTimeoutError(
                    f"CLI did not exit within {timeout}s",
                    timeout=timeout or 0.0,
                    stderr=_decode_text(bytes(stderr)),
                ) from exc

        return CompletedCommand(command, returncode, bytes(stdout), bytes(stderr))


__all__ = [
    "CompletedCommand",
    "BaseCLITransport",
    "BlockingCLITransport",
    "AsyncCLITransport",
]
