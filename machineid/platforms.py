from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from machineid.errors import UnsupportedPlatformError

DARWIN = "darwin"
WIN32 = "win32"
LINUX = "linux"
FREEBSD = "freebsd"

_POWERSHELL_QUERY = (
    "(Get-ItemProperty -Path 'HKLM:\\SOFTWARE\\Microsoft\\Cryptography' "
    "-Name MachineGuid).MachineGuid"
)


@dataclass(frozen=True)
class PlatformCommand:
    platform: str
    command: str
    argv: tuple[str, ...] | None = None
    hide_window: bool = False

    @property
    def uses_shell(self) -> bool:
        return self.argv is None


COMMANDS: Mapping[str, PlatformCommand] = MappingProxyType(
    {
        DARWIN: PlatformCommand(
            platform=DARWIN,
            command="ioreg -rd1 -c IOPlatformExpertDevice",
        ),
        WIN32: PlatformCommand(
            platform=WIN32,
            command=f'powershell.exe -NoProfile -Command "{_POWERSHELL_QUERY}"',
            argv=("powershell.exe", "-NoProfile", "-Command", _POWERSHELL_QUERY),
            hide_window=True,
        ),
        LINUX: PlatformCommand(
            platform=LINUX,
            command=(
                "( cat /var/lib/dbus/machine-id /etc/machine-id 2> /dev/null || hostname ) "
                "| head -n 1 || :"
            ),
        ),
        FREEBSD: PlatformCommand(
            platform=FREEBSD,
            command="kenv -q smbios.system.uuid || sysctl -n kern.hostuuid",
        ),
    }
)


def detect_platform(value: str | None = None) -> str:
    name = sys.platform if value is None else value
    if name.startswith(LINUX):
        return LINUX
    if name.startswith(FREEBSD):
        return FREEBSD
    return name


def get_platform_command(platform: str) -> PlatformCommand:
    try:
        return COMMANDS[platform]
    except KeyError:
        raise UnsupportedPlatformError(platform) from None


def registry_query_command(environ: Mapping[str, str] | None = None) -> PlatformCommand:
    env = os.environ if environ is None else environ
    # 32-bit process on 64-bit Windows must go through sysnative to see the 64-bit hive
    if "PROCESSOR_ARCHITEW6432" in env:
        reg = "%windir%\\sysnative\\cmd.exe /c %windir%\\System32\\REG.exe"
    else:
        reg = "%windir%\\System32\\REG.exe"
    query = f"{reg} QUERY HKEY_LOCAL_MACHINE\\SOFTWARE\\Microsoft\\Cryptography /v MachineGuid"
    return PlatformCommand(
        platform=WIN32,
        command=f"cmd.exe /c {query}",
        argv=("cmd.exe", "/c", query),
        hide_window=True,
    )
