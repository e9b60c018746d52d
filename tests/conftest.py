from __future__ import annotations

import asyncio

import pytest

from machineid.platforms import PlatformCommand
from machineid.runner import CommandOutput

DARWIN_IOREG = """+-o J314sAP  <class IOPlatformExpertDevice, id 0x100000209, registered, matched, active, busy 0 (185 ms), retain 33>
    {
      "IOPlatformSerialNumber" = "C02ZK0XXLVDL"
      "IOPlatformUUID" = "1A2B3C4D-5E6F-7A8B-9C0D-1E2F3A4B5C6D"
      "manufacturer" = <"Apple Inc.">
    }
"""

WIN32_POWERSHELL = "{4c4c4544-0046-3010-8058-b5c04f545233}\r\n"

WIN32_REG_QUERY = (
    "\r\nHKEY_LOCAL_MACHINE\\SOFTWARE\\Microsoft\\Cryptography\r\n"
    "    MachineGuid    REG_SZ    4C4C4544-0046-3010-8058-B5C04F545233\r\n\r\n"
)


class FakeRunner:
    def __init__(self, stdout: str, delay: float = 0.0):
        self.stdout = stdout
        self.delay = delay
        self.calls: list[PlatformCommand] = []

    def _output(self, spec: PlatformCommand) -> CommandOutput:
        self.calls.append(spec)
        return CommandOutput(command=spec.command, returncode=0, stdout=self.stdout)

    def __call__(self, spec: PlatformCommand, timeout: float | None = None) -> CommandOutput:
        return self._output(spec)

    async def run_async(self, spec: PlatformCommand, timeout: float | None = None) -> CommandOutput:
        if self.delay:
            await asyncio.sleep(self.delay)
        return self._output(spec)


@pytest.fixture
def fake_runner():
    return FakeRunner
