from __future__ import annotations


class MachineIdError(Exception):
    pass


class UnsupportedPlatformError(MachineIdError):
    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}")


class CommandExecutionError(MachineIdError):
    def __init__(
        self,
        command: str,
        detail: str,
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.command = command
        self.detail = detail
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Error while obtaining machine id: {detail}")


class ParseError(MachineIdError):
    def __init__(self, platform: str, message: str, output: str = ""):
        self.platform = platform
        self.output = output
        super().__init__(f"Cannot parse machine id output on {platform}: {message}")
