#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日誌工具模組 (基於 loguru)
提供統一的日誌記錄功能，並可將訊息轉送給宿主伺服器的主控台
Logging Utilities Module (Based on loguru)
Provides unified logging functionality and forwards messages to the host server console
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from loguru import logger

from .constants import MB


class LoggerConfig:
    """Loguru 日誌配置管理"""

    _initialized = False
    _log_dir: Optional[Path] = None
    _handler_ids: list[int] = []
    _max_folder_size_mb = 10
    _target_cleanup_size_mb = 8  # 當超過限制時，刪除相當於 8MB 的舊日誌
    _debug_enabled = False

    @classmethod
    def initialize(cls, log_dir: Path, console: bool = False, debug: bool = False) -> None:
        """
        初始化 loguru 檔案日誌（由宿主啟用外掛時呼叫）
        Initialize loguru file logging (called when the host enables the plugin)

        Args:
            log_dir (Path): 日誌目錄
            console (bool): 是否額外輸出到 stderr
            debug (bool): 主控台是否顯示 DEBUG 訊息
        """
        cls._debug_enabled = debug
        if cls._initialized:
            return

        try:
            cls._log_dir = log_dir
            cls._log_dir.mkdir(parents=True, exist_ok=True)

            # 清理超過大小限制的舊日誌
            cls._cleanup_old_logs_if_needed()

            # 建立日誌檔案名稱（格式：年-月-日-時-分.log）
            log_filename = datetime.now().strftime("%Y-%m-%d-%H-%M.log")
            log_file_path = cls._log_dir / log_filename

            cls._handler_ids.append(
                logger.add(
                    log_file_path,
                    format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[component]: <15} | {message}",
                    level="DEBUG",
                    encoding="utf-8",
                    filter=cls._own_record,
                )
            )

            if console:
                cls._handler_ids.append(
                    logger.add(
                        sys.stderr,
                        format="<level>{level: <8}</level> | <cyan>{extra[component]: <15}</cyan> | <level>{message}</level>",
                        level="DEBUG",
                        colorize=True,
                        filter=lambda record: cls._own_record(record) and cls._console_filter(record),
                    )
                )

            cls._initialized = True
            logger.bind(component="Logger").debug(f"Log file: {log_file_path}")

        except Exception as e:
            # 檔案日誌失敗不影響外掛運作
            logger.bind(component="Logger").warning(f"Could not initialise file logging: {e}")
            cls._initialized = True

    @classmethod
    def shutdown(cls) -> None:
        """移除本模組加入的所有 handler"""
        for handler_id in cls._handler_ids:
            try:
                logger.remove(handler_id)
            except ValueError:
                pass
        cls._handler_ids = []
        cls._initialized = False

    @classmethod
    def add_host_sink(cls, forward: Callable[[str, str], None]) -> int:
        """
        將外掛的日誌轉送到宿主的日誌介面
        Forward plugin log records to the host logging sink

        Args:
            forward (Callable[[str, str], None]): 接收 (level, message) 的函式

        Returns:
            int: loguru handler id
        """

        def _sink(message) -> None:
            record = message.record
            forward(record["level"].name, record["message"])

        handler_id = logger.add(
            _sink,
            level="DEBUG",
            format="{message}",
            filter=lambda record: cls._own_record(record) and cls._console_filter(record),
        )
        cls._handler_ids.append(handler_id)
        return handler_id

    @classmethod
    def _get_folder_size_mb(cls, folder: Path) -> float:
        """計算資料夾內日誌大小（MB）"""
        total_size = 0
        try:
            for file in folder.glob("*.log"):
                if file.is_file():
                    total_size += file.stat().st_size
        except OSError:
            pass

        return total_size / MB

    @classmethod
    def _cleanup_old_logs_if_needed(cls) -> None:
        """
        檢查日誌資料夾大小，如果超過 10MB 則刪除相當於 8MB 的舊日誌
        Check log folder size, delete logs worth 8MB if exceeds 10MB
        """
        if cls._log_dir is None:
            return

        try:
            folder_size = cls._get_folder_size_mb(cls._log_dir)

            if folder_size > cls._max_folder_size_mb:
                # 最舊的在前
                log_files = sorted(cls._log_dir.glob("*.log"), key=lambda f: f.stat().st_mtime)

                deleted_size_mb = 0.0
                files_deleted = 0
                for log_file in log_files:
                    if deleted_size_mb >= cls._target_cleanup_size_mb:
                        break
                    try:
                        file_size_mb = log_file.stat().st_size / MB
                        log_file.unlink()
                        deleted_size_mb += file_size_mb
                        files_deleted += 1
                    except OSError:
                        continue

                if files_deleted > 0:
                    logger.bind(component="Logger").info(
                        f"Log folder exceeded {cls._max_folder_size_mb}MB, removed {files_deleted} old log files ({deleted_size_mb:.2f}MB)"
                    )
        except OSError as e:
            logger.bind(component="Logger").warning(f"Failed to clean up old logs: {e}")

    @staticmethod
    def _own_record(record) -> bool:
        """只處理本套件以 bind(component=...) 產生的記錄，不影響宿主其他 loguru 使用者"""
        return "component" in record["extra"]

    @classmethod
    def _console_filter(cls, record) -> bool:
        """
        控制台輸出過濾器：DEBUG 僅在設定開啟時輸出
        Console output filter: DEBUG only when enabled in the configuration
        """
        if record["level"].name == "DEBUG":
            return cls._debug_enabled
        return True

    @classmethod
    def set_debug(cls, enabled: bool) -> None:
        cls._debug_enabled = enabled


def get_logger():
    """取得全域 logger 實例"""
    return logger
