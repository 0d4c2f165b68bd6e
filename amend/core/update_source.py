#!/usr/bin/env python3
"""
遠端建置來源模組
依平台查詢最新建置編號並組出下載網址，支援純文字整數與 JSON 兩種回應格式
Remote Build Source Module
Queries the latest build per platform and builds download URLs; supports plain-integer and JSON bodies
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from ..models import ErrorCode, LatestBuildResult, Platform
from ..utils.constants import DEFAULT_TIMEOUT
from ..utils.http_utils import HTTPUtils
from ..utils.logger import get_logger
from .errors import SourceUnreachableError

logger = get_logger().bind(component="UpdateSource")

__all__ = ["UpdateSource", "SOURCES", "parse_build_token", "query_latest"]


# ====== 回應解析 ======
def _coerce_build(value: Any) -> int:
    """將單一建置值轉為非負整數"""
    if isinstance(value, bool):
        raise SourceUnreachableError(f"Build value {value!r} is not numeric", ErrorCode.MALFORMED_RESPONSE)
    if isinstance(value, int):
        build = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        build = int(value.strip())
    else:
        raise SourceUnreachableError(f"Build value {value!r} is not numeric", ErrorCode.MALFORMED_RESPONSE)
    if build < 0:
        raise SourceUnreachableError(f"Build value {value!r} is negative", ErrorCode.MALFORMED_RESPONSE)
    return build


def parse_build_token(body: str) -> int:
    """從回應內容取出最新建置編號。

    支援：
      - 純文字整數，例如 ``"2345"``
      - JSON 物件中的 ``builds.latest``（Purpur）
      - JSON 物件中的 ``builds`` 陣列，取最大值（Paper 版本清單）

    Raises:
        SourceUnreachableError: 內容無法解析（MALFORMED_RESPONSE）
    """
    text = (body or "").strip()
    if not text:
        raise SourceUnreachableError("Empty response body", ErrorCode.MALFORMED_RESPONSE)

    if text.isascii() and text.isdigit():
        return int(text)

    try:
        document = json.loads(text)
    except ValueError as e:
        raise SourceUnreachableError(f"Response is neither an integer nor JSON: {e}", ErrorCode.MALFORMED_RESPONSE) from e

    if isinstance(document, int) and not isinstance(document, bool):
        return _coerce_build(document)
    if not isinstance(document, dict):
        raise SourceUnreachableError("JSON response is not an object", ErrorCode.MALFORMED_RESPONSE)

    builds = document.get("builds")
    if isinstance(builds, dict) and "latest" in builds:
        return _coerce_build(builds["latest"])
    if isinstance(builds, list) and builds:
        return max(_coerce_build(entry) for entry in builds)
    raise SourceUnreachableError("JSON response has no builds.latest field", ErrorCode.MALFORMED_RESPONSE)


# ====== 平台來源 ======
@dataclass(frozen=True)
class UpdateSource:
    """單一平台的遠端查詢與下載端點

    Attributes:
        platform (Platform): 平台
        latest_url_template (str): 最新建置查詢網址，可使用 {mc}
        download_url_template (str): 下載網址，可使用 {mc} 與 {build}
        timeout (int): 連線 / 讀取逾時（秒）
    """

    platform: Platform
    latest_url_template: str
    download_url_template: str
    timeout: int = DEFAULT_TIMEOUT

    def latest_url(self, mc_version: str) -> str:
        return self.latest_url_template.format(mc=mc_version)

    def download_url(self, mc_version: str, build: int) -> str:
        return self.download_url_template.format(mc=mc_version, build=build)

    def with_timeout(self, timeout: int) -> UpdateSource:
        return UpdateSource(self.platform, self.latest_url_template, self.download_url_template, timeout)

    def query_latest(self, mc_version: str) -> LatestBuildResult:
        """
        查詢指定 Minecraft 版本的最新建置，任何失敗都以結果物件回報，不拋出例外
        Query the newest build for a Minecraft version; failures are reported in the result, never raised
        """
        url = self.latest_url(mc_version)
        body = HTTPUtils.get_text(url, timeout=self.timeout)
        if body is None:
            return LatestBuildResult(
                self.platform, mc_version, error=ErrorCode.SOURCE_UNREACHABLE, detail=f"No response from {url}"
            )

        try:
            build = parse_build_token(body)
        except SourceUnreachableError as e:
            logger.warning(f"Unexpected response from {url}: {e}")
            return LatestBuildResult(self.platform, mc_version, error=e.code, detail=str(e))

        logger.debug(f"Latest {self.platform.value} build for {mc_version}: {build}")
        return LatestBuildResult(self.platform, mc_version, build=build)


PAPER_SOURCE = UpdateSource(
    platform=Platform.PAPER,
    latest_url_template="https://api.papermc.io/v2/projects/paper/versions/{mc}",
    download_url_template=(
        "https://api.papermc.io/v2/projects/paper/versions/{mc}/builds/{build}/downloads/paper-{mc}-{build}.jar"
    ),
)

PURPUR_SOURCE = UpdateSource(
    platform=Platform.PURPUR,
    latest_url_template="https://api.purpurmc.org/v2/purpur/{mc}",
    download_url_template="https://api.purpurmc.org/v2/purpur/{mc}/{build}/download",
)

SOURCES: dict[Platform, UpdateSource] = {
    Platform.PAPER: PAPER_SOURCE,
    Platform.PURPUR: PURPUR_SOURCE,
}


def query_latest(
    platform: Platform, mc_version: str, sources: Mapping[Platform, UpdateSource] | None = None
) -> LatestBuildResult:
    """依平台分派到對應來源查詢最新建置"""
    source = (SOURCES if sources is None else sources).get(platform)
    if source is None:
        return LatestBuildResult(
            platform, mc_version, error=ErrorCode.UNSUPPORTED_PLATFORM, detail=f"No source for {platform.value}"
        )
    return source.query_latest(mc_version)
