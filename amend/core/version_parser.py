"""宿主版本字串解析工具。

只負責把宿主回報的版本字串轉為 RuntimeVersion，無副作用。
"""

from __future__ import annotations

import re

from ..models import RuntimeVersion
from .errors import VersionParseError

__all__ = ["parse_runtime_version", "split_version_string"]

# git-Purpur-1844 (MC: 1.19.2)
_LEGACY_PATTERN = re.compile(r"^git-[A-Za-z]+-(?P<build>[0-9]+) \(MC: (?P<mc>[^)\s]+)\)$")
_BUILD_PATTERN = re.compile(r"^[0-9]+$")


def split_version_string(raw: str) -> tuple[str, int]:
    """將 `<mc>-<build>` 拆成 (mc_version, build_number)。

    建置編號為最後一個 `-` 之後的部分，之前的全部為 Minecraft 版本。
    也接受舊式 Bukkit 格式 `git-<Brand>-<build> (MC: <mc>)`。
    """
    if not isinstance(raw, str):
        raise VersionParseError(f"Version string must be text, got {type(raw).__name__}")

    text = raw.strip()
    legacy = _LEGACY_PATTERN.match(text)
    if legacy:
        return legacy.group("mc"), int(legacy.group("build"))

    mc_version, sep, build_token = text.rpartition("-")
    if not sep:
        raise VersionParseError(f"Version string {raw!r} has no '-' separator")
    if not mc_version:
        raise VersionParseError(f"Version string {raw!r} has no Minecraft version before the build")
    if not _BUILD_PATTERN.match(build_token):
        raise VersionParseError(f"Build token {build_token!r} in {raw!r} is not a non-negative integer")
    return mc_version, int(build_token)


def parse_runtime_version(raw: str, brand: str) -> RuntimeVersion:
    """由版本字串與宿主品牌名稱建立 RuntimeVersion。

    Raises:
        VersionParseError: 版本字串格式錯誤（MALFORMED_VERSION）
    """
    mc_version, build_number = split_version_string(raw)
    return RuntimeVersion(platform_identifier=brand or "", build_number=build_number, mc_version=mc_version)
