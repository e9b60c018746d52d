from __future__ import annotations

import re
from typing import Callable

from machineid.errors import ParseError, UnsupportedPlatformError
from machineid.platforms import DARWIN, FREEBSD, LINUX, WIN32

DARWIN_MARKER = "IOPlatformUUID"
REGISTRY_MARKER = "REG_SZ"

_WHITESPACE = re.compile(r"\s+")
_DARWIN_NOISE = re.compile(r"=|\s+|\"")


def _ensure_identifier(platform: str, value: str, raw: str) -> str:
    if not value:
        raise ParseError(platform, "empty identifier", output=raw)
    return value


def parse_darwin(raw: str) -> str:
    _, marker, tail = raw.partition(DARWIN_MARKER)
    if not marker:
        raise ParseError(DARWIN, f"marker {DARWIN_MARKER!r} not found", output=raw)
    line = tail.split("\n", 1)[0]
    return _ensure_identifier(DARWIN, _DARWIN_NOISE.sub("", line).lower(), raw)


def parse_win32(raw: str) -> str:
    return _ensure_identifier(WIN32, raw.strip().lower(), raw)


def _strip_all_whitespace(platform: str, raw: str) -> str:
    return _ensure_identifier(platform, _WHITESPACE.sub("", raw).lower(), raw)


def parse_linux(raw: str) -> str:
    return _strip_all_whitespace(LINUX, raw)


def parse_freebsd(raw: str) -> str:
    return _strip_all_whitespace(FREEBSD, raw)


PARSERS: dict[str, Callable[[str], str]] = {
    DARWIN: parse_darwin,
    WIN32: parse_win32,
    LINUX: parse_linux,
    FREEBSD: parse_freebsd,
}


def parse_output(platform: str, raw: str) -> str:
    parser = PARSERS.get(platform)
    if parser is None:
        raise UnsupportedPlatformError(platform)
    return parser(raw)


def parse_registry_query(raw: str) -> str:
    """Extract MachineGuid from ``REG.exe QUERY ... /v MachineGuid`` output."""
    _, marker, tail = raw.partition(REGISTRY_MARKER)
    if not marker:
        raise ParseError(WIN32, f"marker {REGISTRY_MARKER!r} not found", output=raw)
    return _ensure_identifier(WIN32, _WHITESPACE.sub("", tail).lower(), raw)
