#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
外掛進入點
宿主只需呼叫 on_enable / on_disable 兩個生命週期函式
Plugin Entry Point
The host only calls the two lifecycle callbacks on_enable / on_disable
"""
# ====== 標準函式庫 ======
from __future__ import annotations

from pathlib import Path
# ====== 專案內部模組 ======
from ..models import MigrationResult, UpdateReport
from ..utils.logger import LoggerConfig, get_logger
from ..utils.runtime_paths import RuntimePaths
from .config_store import ConfigStore
from .host import HostBridge, MessagePacer
from .orchestrator import Orchestrator

logger = get_logger().bind(component="AmendPlugin")

_HOST_LEVELS = {"DEBUG": "info", "INFO": "info", "SUCCESS": "info", "WARNING": "warning", "ERROR": "warning", "CRITICAL": "warning"}


class AmendPlugin:
    """
    將宿主介面、日誌、設定與 Orchestrator 組裝在一起
    Wires the host bridge, logging, configuration and the Orchestrator together
    """

    def __init__(self, host: HostBridge, server_dir: Path | None = None, data_dir: Path | None = None, **orchestrator_options):
        self.host = host
        self.server_dir = Path(server_dir) if server_dir is not None else Path.cwd()
        self.data_dir = Path(data_dir) if data_dir is not None else RuntimePaths.get_data_dir(self.server_dir)
        self.config_store = ConfigStore(self.data_dir)
        self.pacer = MessagePacer()
        self.orchestrator = Orchestrator(
            host,
            self.config_store,
            server_dir=self.server_dir,
            on_status=self.pacer,
            **orchestrator_options,
        )
        self._host_sink_id: int | None = None

    def _forward(self, level: str, message: str) -> None:
        self.host.log(_HOST_LEVELS.get(level, "info"), message)

    def _apply_runtime_settings(self) -> None:
        config = self.config_store.config
        self.pacer.delay = config.message_delay
        LoggerConfig.set_debug(config.debug_logging)

    def on_enable(self) -> MigrationResult | None:
        RuntimePaths.ensure_dir(self.data_dir)
        LoggerConfig.initialize(RuntimePaths.get_log_dir(self.data_dir))
        if self._host_sink_id is None:
            self._host_sink_id = LoggerConfig.add_host_sink(self._forward)

        result = self.orchestrator.on_enable()
        self._apply_runtime_settings()
        return result

    def on_disable(self) -> UpdateReport:
        # 暫停時間以關閉當下的設定為準
        self.config_store.reload()
        self._apply_runtime_settings()
        try:
            return self.orchestrator.on_disable()
        finally:
            LoggerConfig.shutdown()
            self._host_sink_id = None
