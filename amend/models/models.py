"""資料模型定義
定義更新流程中使用的核心資料結構與列舉
Data Model Definitions
Defines core data structures and enumerations used by the update pipeline
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


# ====== 列舉 ======
class Platform(str, Enum):
    """已解析的伺服器平台（建置編號各自獨立計數）"""

    PAPER = "paper"
    PURPUR = "purpur"


class PlatformSelection(str, Enum):
    """設定檔中的 server-type 選項"""

    AUTO = "AUTO"
    PAPER = "paper"
    PURPUR = "purpur"
    INVALID = "<invalid>"

    @classmethod
    def from_config(cls, value: object) -> PlatformSelection:
        """解析設定值（不分大小寫），無法辨識時回傳 INVALID"""
        text = str(value).strip().lower() if value is not None else ""
        for member in (cls.AUTO, cls.PAPER, cls.PURPUR):
            if text == member.value.lower():
                return member
        return cls.INVALID

    def to_platform(self) -> Platform | None:
        if self is PlatformSelection.PAPER:
            return Platform.PAPER
        if self is PlatformSelection.PURPUR:
            return Platform.PURPUR
        return None


class MigrationOutcome(str, Enum):
    UNCHANGED = "unchanged"
    MIGRATED_OK = "migrated_ok"
    MIGRATED_FAILED = "migrated_failed"
    FIRST_RUN = "first_run"


class UpdateDecision(str, Enum):
    UP_TO_DATE = "up_to_date"
    UPDATE_AVAILABLE = "update_available"
    UNSUPPORTED_VERSION = "unsupported_version"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    SOURCE_UNREACHABLE = "source_unreachable"


class OrchestratorState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    CHECKING = "checking"
    UP_TO_DATE = "up_to_date"
    UPDATING = "updating"
    TERMINATED_UNSUPPORTED = "terminated_unsupported"


class ErrorCode(str, Enum):
    MALFORMED_VERSION = "MALFORMED_VERSION"
    CONFIG_IO = "CONFIG_IO"
    SOURCE_UNREACHABLE = "SOURCE_UNREACHABLE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    DOWNLOAD_FAILED = "DOWNLOAD_FAILED"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    UNSUPPORTED_PLATFORM = "UNSUPPORTED_PLATFORM"


# ====== 執行中版本 ======
@dataclass(frozen=True)
class RuntimeVersion:
    """由宿主版本字串解析出的執行中版本資訊
    Running build information derived from the host version string

    Attributes:
        platform_identifier (str): 宿主回報的品牌名稱（原樣保留）
        build_number (int): 建置編號（非負整數）
        mc_version (str): Minecraft 版本
    """

    platform_identifier: str
    build_number: int
    mc_version: str

    @property
    def platform_display(self) -> str:
        """顯示用的平台名稱（不分大小寫）"""
        return self.platform_identifier.strip().capitalize()


# ====== 設定 ======
@dataclass
class Configuration:
    """外掛設定檔內容
    Plugin configuration file content

    Attributes:
        schema_version (int): 設定檔結構版本 (config-version)
        jar_file_name (str): 要替換的伺服器 jar 檔名 (jar-name)
        platform_selection (PlatformSelection): 平台選擇 (server-type)
        raw_server_type (str): server-type 原始字串，供錯誤訊息使用
        request_timeout (int): 網路請求逾時秒數 (request-timeout)
        message_delay (float): 狀態訊息後的暫停秒數 (message-delay)
        debug_logging (bool): 是否輸出 DEBUG 訊息 (debug-logging)
        shutdown_on_unsupported (bool): 不支援時是否要求關閉 (shutdown-on-unsupported)
    """

    schema_version: int
    jar_file_name: str = "server.jar"
    platform_selection: PlatformSelection = PlatformSelection.AUTO
    raw_server_type: str = "AUTO"
    request_timeout: int = 10
    message_delay: float = 0.0
    debug_logging: bool = False
    shutdown_on_unsupported: bool = True

    def to_document(self) -> dict[str, object]:
        """轉換為設定檔鍵值"""
        return {
            "config-version": self.schema_version,
            "jar-name": self.jar_file_name,
            "server-type": self.raw_server_type,
            "request-timeout": self.request_timeout,
            "message-delay": self.message_delay,
            "debug-logging": self.debug_logging,
            "shutdown-on-unsupported": self.shutdown_on_unsupported,
        }


@dataclass(frozen=True)
class MigrationResult:
    """一次 migrate 呼叫的結果"""

    outcome: MigrationOutcome
    previous_version: int
    backup_path: Path | None = None
    newer_schema: bool = False


# ====== 遠端查詢 ======
@dataclass(frozen=True)
class LatestBuildResult:
    """遠端最新建置查詢結果；build 為 None 表示無法判定"""

    platform: Platform
    mc_version: str
    build: int | None = None
    error: ErrorCode | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.build is not None and self.error is None


# ====== 更新報告 ======
@dataclass
class UpdateReport:
    """一次關閉週期的檢查結果"""

    state: OrchestratorState
    decision: UpdateDecision | None = None
    runtime: RuntimeVersion | None = None
    platform: Platform | None = None
    latest_build: int | None = None
    applied: bool = False
    shutdown_requested: bool = False
    error: ErrorCode | None = None
    message: str = ""
