#!/usr/bin/env python3
"""設定檔管理模組
負責載入、遷移與儲存外掛的版本化設定檔 (config.toml)
Configuration Store Module
Loads, migrates and persists the plugin's versioned configuration file (config.toml)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import toml

from ..models import Configuration, MigrationOutcome, MigrationResult, PlatformSelection
from ..utils.logger import get_logger
from ..utils.path_utils import PathUtils
from ..version_info import APP_NAME, CONFIG_VERSION
from .errors import ConfigIOError

logger = get_logger().bind(component="ConfigStore")

CONFIG_FILE_NAME = "config.toml"

_HEADER = (
    f"# {APP_NAME} configuration\n"
    "# jar-name: server jar (relative to the server directory) replaced on shutdown\n"
    "# server-type: AUTO, paper or purpur\n"
    "# Do not edit config-version.\n\n"
)

# 設定檔鍵 -> 預設值（資料驅動）
_DEFAULTS: dict[str, Any] = {
    "jar-name": "server.jar",
    "server-type": PlatformSelection.AUTO.value,
    "request-timeout": 10,
    "message-delay": 0.0,
    "debug-logging": False,
    "shutdown-on-unsupported": True,
}


def default_configuration(schema_version: int = CONFIG_VERSION) -> Configuration:
    """取得預設設定"""
    return _from_document({**_DEFAULTS, "config-version": schema_version})


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_bool(key: str, value: Any, default: bool) -> bool:
    """只接受 TOML 布林值，其他型別（例如字串 "false"）記錄警告並使用預設值"""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    logger.warning(f"{key} must be true or false, got {value!r}; using {default}")
    return default


def _from_document(document: dict[str, Any]) -> Configuration:
    """由設定檔鍵值建立 Configuration，缺少的鍵使用預設值"""
    raw_server_type = str(document.get("server-type", _DEFAULTS["server-type"]))
    jar_name = document.get("jar-name", _DEFAULTS["jar-name"])
    if not isinstance(jar_name, str) or not jar_name.strip():
        logger.warning(f"Invalid jar-name {jar_name!r}, using {_DEFAULTS['jar-name']!r}")
        jar_name = _DEFAULTS["jar-name"]

    return Configuration(
        # 缺少或無效的 config-version 視為未版本化的舊設定 (0)
        schema_version=_as_int(document.get("config-version"), 0),
        jar_file_name=jar_name.strip(),
        platform_selection=PlatformSelection.from_config(raw_server_type),
        raw_server_type=raw_server_type,
        request_timeout=max(1, _as_int(document.get("request-timeout"), _DEFAULTS["request-timeout"])),
        message_delay=max(0.0, _as_float(document.get("message-delay"), _DEFAULTS["message-delay"])),
        debug_logging=_as_bool("debug-logging", document.get("debug-logging"), _DEFAULTS["debug-logging"]),
        shutdown_on_unsupported=_as_bool(
            "shutdown-on-unsupported", document.get("shutdown-on-unsupported"), _DEFAULTS["shutdown-on-unsupported"]
        ),
    )


class ConfigStore:
    """外掛設定檔的唯一擁有者"""

    # ====== 初始化與檔案操作 ======
    def __init__(self, data_dir: Path, expected_version: int = CONFIG_VERSION):
        self.data_dir = Path(data_dir)
        self.config_path = self.data_dir / CONFIG_FILE_NAME
        self.expected_version = expected_version
        self._config = default_configuration(expected_version)

    @property
    def config(self) -> Configuration:
        return self._config

    def exists(self) -> bool:
        return self.config_path.is_file()

    def _read_document(self) -> dict[str, Any]:
        try:
            text = PathUtils.read_text_file(self.config_path)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigIOError(f"Cannot read {self.config_path}: {e}") from e
        if text is None:
            return {}
        try:
            document = toml.loads(text)
        except toml.TomlDecodeError as e:
            raise ConfigIOError(f"{self.config_path} is not valid TOML: {e}") from e
        return document

    def load(self) -> Configuration:
        """
        讀取設定檔；檔案不存在時回傳預設值，讀取失敗時記錄警告並回傳預設值
        Load the configuration; defaults when absent, warning plus defaults when unreadable
        """
        if not self.exists():
            self._config = default_configuration(self.expected_version)
            return self._config

        try:
            document = self._read_document()
        except ConfigIOError as e:
            logger.warning(f"{e}; using defaults")
            self._config = default_configuration(self.expected_version)
            return self._config

        self._config = _from_document(document)
        return self._config

    def reload(self) -> Configuration:
        """重新讀取設定檔，套用執行期間的手動修改"""
        logger.debug(f"Reloading {self.config_path}")
        return self.load()

    def save(self, config: Configuration | None = None) -> bool:
        """原子寫入設定檔；失敗時記錄警告並回傳 False"""
        if config is not None:
            self._config = config
        try:
            PathUtils.write_text_atomic(self.config_path, _HEADER + toml.dumps(self._config.to_document()))
            return True
        except OSError as e:
            logger.warning(f"Cannot write {self.config_path}: {e}")
            return False

    # ====== 基本設定操作 ======
    def get(self, key: str, default: Any = None) -> Any:
        """以設定檔鍵名取得目前設定值"""
        return self._config.to_document().get(key, default)

    @property
    def jar_file_name(self) -> str:
        return self._config.jar_file_name

    @property
    def platform_selection(self) -> PlatformSelection:
        return self._config.platform_selection

    # ====== 結構版本遷移 ======
    def backup_path_for(self, version: int) -> Path:
        """舊設定檔備份路徑，以遷移前的版本命名"""
        return self.data_dir / f"config-v{version}.toml.bak"

    def migrate(self, current: int, expected: int | None = None) -> MigrationResult:
        """
        依結構版本比較結果遷移設定檔，永不拋出例外
        Migrate the configuration according to a three-way schema comparison; never raises

        Args:
            current (int): 設定檔目前的結構版本
            expected (int | None): 程式預期的結構版本，預設為 CONFIG_VERSION

        Returns:
            MigrationResult: 遷移結果
        """
        expected = self.expected_version if expected is None else expected

        if current < expected:
            return self._migrate_forward(current, expected)

        if current == expected:
            if self.exists():
                return MigrationResult(MigrationOutcome.UNCHANGED, current)
            logger.info(f"Creating default configuration at {self.config_path}")
            if not self.save(default_configuration(expected)):
                return MigrationResult(MigrationOutcome.MIGRATED_FAILED, current)
            return MigrationResult(MigrationOutcome.FIRST_RUN, current)

        logger.warning(
            f"{self.config_path.name} uses config-version {current}, newer than supported version {expected}; "
            "leaving it untouched"
        )
        return MigrationResult(MigrationOutcome.UNCHANGED, current, newer_schema=True)

    def _migrate_forward(self, current: int, expected: int) -> MigrationResult:
        backup = self.backup_path_for(current)
        try:
            if self.exists():
                os.replace(self.config_path, backup)
                logger.info(f"Backed up old configuration to {backup.name}")
            else:
                backup = None
        except OSError as e:
            logger.warning(f"Configuration migration {current} -> {expected} failed while backing up: {e}")
            return MigrationResult(MigrationOutcome.MIGRATED_FAILED, current)

        if not self.save(default_configuration(expected)):
            logger.warning(f"Configuration migration {current} -> {expected} failed while writing defaults")
            return MigrationResult(MigrationOutcome.MIGRATED_FAILED, current, backup_path=backup)

        logger.info(f"Configuration migrated from version {current} to {expected}")
        return MigrationResult(MigrationOutcome.MIGRATED_OK, current, backup_path=backup)
