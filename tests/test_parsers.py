from __future__ import annotations

import pytest
from conftest import DARWIN_IOREG, WIN32_POWERSHELL, WIN32_REG_QUERY

from machineid.errors import ParseError, UnsupportedPlatformError
from machineid.parsers import parse_output, parse_registry_query


def test_darwin_extracts_platform_uuid():
    assert parse_output("darwin", DARWIN_IOREG) == "1a2b3c4d-5e6f-7a8b-9c0d-1e2f3a4b5c6d"


def test_darwin_missing_marker():
    raw = '+-o Root  <class IORegistryEntry>\n    {\n      "IOPlatformSerialNumber" = "X"\n    }\n'
    with pytest.raises(ParseError, match="IOPlatformUUID") as info:
        parse_output("darwin", raw)
    assert info.value.platform == "darwin"
    assert info.value.output == raw


def test_darwin_marker_without_value():
    with pytest.raises(ParseError, match="empty identifier"):
        parse_output("darwin", '"IOPlatformUUID" = ""\n')


def test_win32_keeps_braces():
    assert parse_output("win32", WIN32_POWERSHELL) == "{4c4c4544-0046-3010-8058-b5c04f545233}"


def test_win32_only_trims_edges():
    assert parse_output("win32", "  AB CD \r\n") == "ab cd"


@pytest.mark.parametrize("platform", ["linux", "freebsd"])
def test_whitespace_removed_everywhere(platform):
    assert parse_output(platform, "abc123 \n") == "abc123"
    assert parse_output(platform, " AB\tC1\r\n23 \n") == "abc123"


@pytest.mark.parametrize("platform", ["linux", "freebsd", "win32"])
def test_blank_output_is_a_parse_error(platform):
    with pytest.raises(ParseError):
        parse_output(platform, " \n")


def test_unknown_platform():
    with pytest.raises(UnsupportedPlatformError, match="sunos5"):
        parse_output("sunos5", "whatever")


def test_registry_query():
    assert parse_registry_query(WIN32_REG_QUERY) == "4c4c4544-0046-3010-8058-b5c04f545233"


def test_registry_query_missing_marker():
    with pytest.raises(ParseError, match="REG_SZ"):
        parse_registry_query("ERROR: The system was unable to find the specified registry key or value.")
