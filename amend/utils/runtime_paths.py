#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
運行時路徑管理工具
提供外掛資料目錄、日誌目錄等路徑配置
Runtime Path Management Utilities
Provides plugin data directory and log directory path configuration
"""
# ====== 標準函式庫 ======
from pathlib import Path
# ====== 專案內部模組 ======
from ..version_info import APP_NAME


class RuntimePaths:
    """外掛運行時路徑"""

    # 取得外掛資料目錄
    @staticmethod
    def get_data_dir(server_dir: Path) -> Path:
        """
        取得外掛的資料存放目錄
        Get the plugin data directory (<server>/plugins/Amend)

        Args:
            server_dir (Path): 伺服器根目錄

        Returns:
            Path: 外掛資料目錄路徑
        """
        return Path(server_dir) / "plugins" / APP_NAME

    @staticmethod
    def get_log_dir(data_dir: Path) -> Path:
        """取得日誌目錄 (<data_dir>/logs)"""
        return Path(data_dir) / "logs"

    # 確保目錄存在
    @staticmethod
    def ensure_dir(p: Path) -> Path:
        """
        確保指定路徑的目錄存在，如果不存在則建立
        Ensure the directory at specified path exists, create if it doesn't exist
        """
        p.mkdir(parents=True, exist_ok=True)
        return p
