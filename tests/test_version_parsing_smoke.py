from __future__ import annotations

import pytest
from amend.core.errors import VersionParseError
from amend.core.version_parser import parse_runtime_version
from amend.models import ErrorCode


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("raw", "mc_version", "build"),
    [
        ("1.21.4-196", "1.21.4", 196),
        ("1.20-0", "1.20", 0),
        ("  1.21.4-2345  ", "1.21.4", 2345),
        ("1.21.4-pre1-12", "1.21.4-pre1", 12),
        ("git-Purpur-1844 (MC: 1.19.2)", "1.19.2", 1844),
    ],
)
def test_parse_runtime_version_valid(raw: str, mc_version: str, build: int) -> None:
    runtime = parse_runtime_version(raw, "Purpur")
    assert runtime.mc_version == mc_version
    assert runtime.build_number == build
    assert runtime.platform_identifier == "Purpur"


@pytest.mark.smoke
@pytest.mark.parametrize("raw", ["", "1.21.4", "1.21.4-", "-196", "1.21.4-abc", "1.21.4-19x", "1.21.4-+5", "1.21.4-١٢", None])
def test_parse_runtime_version_malformed(raw) -> None:
    with pytest.raises(VersionParseError) as excinfo:
        parse_runtime_version(raw, "Paper")
    assert excinfo.value.code is ErrorCode.MALFORMED_VERSION


@pytest.mark.smoke
def test_brand_is_kept_verbatim_but_displayed_case_insensitively() -> None:
    runtime = parse_runtime_version("1.21.4-7", "pURPUR")
    assert runtime.platform_identifier == "pURPUR"
    assert runtime.platform_display == "Purpur"
