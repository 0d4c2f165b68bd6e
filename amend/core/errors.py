#!/usr/bin/env python3
"""更新流程的例外類別
所有例外都帶有 ErrorCode，最終由 Orchestrator 轉為日誌與報告，不會傳到宿主
Update pipeline exceptions
Every exception carries an ErrorCode and is turned into a log line and report by the Orchestrator
"""

from __future__ import annotations

from ..models import ErrorCode


class AmendError(Exception):
    """Amend 例外基底類別"""

    code: ErrorCode = ErrorCode.SOURCE_UNREACHABLE

    def __init__(self, message: str, code: ErrorCode | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ConfigIOError(AmendError):
    """設定檔讀寫失敗（本地降級為警告與預設值）"""

    code = ErrorCode.CONFIG_IO


class VersionParseError(AmendError):
    """無法解析宿主版本字串"""

    code = ErrorCode.MALFORMED_VERSION


class SourceUnreachableError(AmendError):
    """無法取得或解析遠端最新建置"""

    code = ErrorCode.SOURCE_UNREACHABLE


class DownloadIncompleteError(AmendError):
    """下載未完整完成，目標檔案保持不變"""

    code = ErrorCode.DOWNLOAD_FAILED


class UnsupportedVersionError(AmendError):
    """執行中的 Minecraft 版本不是本外掛的編譯目標"""

    code = ErrorCode.UNSUPPORTED_VERSION


class UnsupportedPlatformError(AmendError):
    """無法辨識或不支援的伺服器平台"""

    code = ErrorCode.UNSUPPORTED_PLATFORM
