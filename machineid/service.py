from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Awaitable, Callable

from machineid.config.models import MachineIdConfig
from machineid.errors import MachineIdError
from machineid.parsers import parse_output, parse_registry_query
from machineid.platforms import (
    WIN32,
    PlatformCommand,
    detect_platform,
    get_platform_command,
    registry_query_command,
)
from machineid.runner import CommandOutput, run_command, run_command_async
from machineid.utils.hashers import sha256_text
from machineid.utils.logging import get_logger

SyncRunner = Callable[[PlatformCommand, float | None], CommandOutput]
AsyncRunner = Callable[[PlatformCommand, float | None], Awaitable[CommandOutput]]

DIAGNOSE_TIMEOUT_SECONDS = 10.0

_GUID = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


@dataclass
class DiagnosticReport:
    platform: str
    command: str
    identifier: str
    registry_identifier: str | None = None

    @property
    def match(self) -> bool | None:
        if self.registry_identifier is None:
            return None
        return self.identifier == self.registry_identifier

    @property
    def valid_format(self) -> bool | None:
        if self.platform != WIN32:
            return None
        return bool(_GUID.match(self.identifier))


class MachineIdService:
    def __init__(
        self,
        config: MachineIdConfig | None = None,
        platform: str | None = None,
        runner: SyncRunner = run_command,
        async_runner: AsyncRunner = run_command_async,
    ):
        self.config = config or MachineIdConfig()
        self.platform = detect_platform(platform)
        self.runner = runner
        self.async_runner = async_runner
        self.logger = get_logger()

    def _command(self) -> PlatformCommand:
        try:
            spec = get_platform_command(self.platform)
        except MachineIdError:
            self.logger.warning("no machine id command for platform={}", self.platform)
            raise
        self.logger.debug("dispatch platform={} command={}", self.platform, spec.command)
        return spec

    def _finish(self, output: CommandOutput, original: bool) -> str:
        try:
            identifier = parse_output(self.platform, output.stdout)
        except MachineIdError as exc:
            self.logger.warning("machine id parse failed platform={} error={}", self.platform, exc)
            raise
        self.logger.debug("machine id parsed platform={} length={}", self.platform, len(identifier))
        return identifier if original else sha256_text(identifier)

    def _run_sync(self, spec: PlatformCommand, timeout: float | None) -> CommandOutput:
        try:
            return self.runner(spec, timeout)
        except MachineIdError as exc:
            self.logger.warning("machine id command failed platform={} error={}", self.platform, exc)
            raise

    def get_sync(self, original: bool) -> str:
        spec = self._command()
        output = self._run_sync(spec, self.config.timeout_seconds)
        return self._finish(output, original)

    async def get(self, original: bool) -> str:
        spec = self._command()
        try:
            output = await self.async_runner(spec, self.config.timeout_seconds)
        except MachineIdError as exc:
            self.logger.warning("machine id command failed platform={} error={}", self.platform, exc)
            raise
        return self._finish(output, original)

    def diagnose(self) -> DiagnosticReport:
        timeout = self.config.timeout_seconds or DIAGNOSE_TIMEOUT_SECONDS
        spec = self._command()
        report = DiagnosticReport(
            platform=self.platform,
            command=spec.command,
            identifier=self._finish(self._run_sync(spec, timeout), original=True),
        )
        if self.platform == WIN32:
            registry = self._run_sync(registry_query_command(), timeout)
            report.registry_identifier = parse_registry_query(registry.stdout)
        return report
