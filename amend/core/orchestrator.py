#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
更新流程協調器
啟用時遷移設定並啟動被動更新提示；停用時比對目前與最新建置，必要時下載並替換伺服器 jar
Update Orchestrator
On enable: migrate the configuration and arm a passive update notice.
On disable: resolve current vs latest build, download and replace the server jar when they differ.
"""
# ====== 標準函式庫 ======
from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable, Mapping
# ====== 專案內部模組 ======
from ..models import (
    Configuration,
    ErrorCode,
    MigrationOutcome,
    MigrationResult,
    OrchestratorState,
    Platform,
    PlatformSelection,
    RuntimeVersion,
    UpdateDecision,
    UpdateReport,
)
from ..utils.logger import get_logger
from ..utils.path_utils import PathUtils
from ..version_info import TARGET_MC_VERSION
from .config_store import ConfigStore
from .downloader import Downloader
from .errors import AmendError, UnsupportedPlatformError, UnsupportedVersionError, VersionParseError
from .host import HostBridge
from .update_source import SOURCES, UpdateSource, query_latest
from .version_parser import parse_runtime_version

# AUTO 模式下品牌名稱對應（區分大小寫）
BRAND_PLATFORMS: dict[str, Platform] = {
    "Paper": Platform.PAPER,
    "Purpur": Platform.PURPUR,
}


def resolve_platform(config: Configuration, brand: str) -> Platform:
    """
    依設定與宿主品牌決定平台
    Resolve the concrete platform from the configuration and the host brand

    Raises:
        UnsupportedPlatformError: AUTO 無法辨識品牌，或 server-type 無效
    """
    if config.platform_selection is PlatformSelection.AUTO:
        platform = BRAND_PLATFORMS.get(brand)
        if platform is None:
            raise UnsupportedPlatformError(
                f"Server brand {brand!r} is not supported for AUTO detection; set server-type to paper or purpur"
            )
        return platform

    platform = config.platform_selection.to_platform()
    if platform is None:
        raise UnsupportedPlatformError(f"server-type {config.raw_server_type!r} is invalid; use AUTO, paper or purpur")
    return platform


# 停用時等待背景檢查結束的上限（秒）
PASSIVE_JOIN_TIMEOUT = 2.0


def _spawn_daemon(task: Callable[[], None]) -> threading.Thread:
    thread = threading.Thread(target=task, name="amend-passive-check", daemon=True)
    thread.start()
    return thread


class Orchestrator:
    """
    單一實例對應一個宿主生命週期；跨週期狀態只存在於設定檔
    One instance per host lifecycle; the configuration file is the only cross-cycle state
    """

    def __init__(
        self,
        host: HostBridge,
        config_store: ConfigStore,
        *,
        server_dir: Path | None = None,
        target_mc_version: str = TARGET_MC_VERSION,
        sources: Mapping[Platform, UpdateSource] | None = None,
        downloader: Downloader | None = None,
        logger: Any = None,
        background: Callable[[Callable[[], None]], Any] | None = None,
        on_status: Callable[[str], None] | None = None,
        shutdown_after_update: bool = True,
    ):
        self.host = host
        self.config_store = config_store
        self.server_dir = Path(server_dir) if server_dir is not None else Path.cwd()
        self.target_mc_version = target_mc_version
        self.logger = logger if logger is not None else get_logger().bind(component="Orchestrator")
        self.shutdown_after_update = shutdown_after_update
        self.state = OrchestratorState.IDLE
        self._sources = sources
        self._downloader = downloader
        self._background = background or _spawn_daemon
        self._on_status = on_status
        self._passive_thread: Any = None
        self._closing = threading.Event()

    # ====== 訊息輸出 ======
    def _emit(self, level: str, message: str) -> None:
        getattr(self.logger, level)(message)
        if self._on_status is not None:
            self._on_status(message)

    # ====== 啟用 ======
    def on_enable(self) -> MigrationResult | None:
        """
        遷移設定並啟動被動更新提示，立即返回，不阻塞宿主啟動
        Migrate the configuration, arm the passive notice and return immediately
        """
        self.state = OrchestratorState.IDLE
        self._closing.clear()
        result = None
        try:
            loaded = self.config_store.load()
            result = self.config_store.migrate(loaded.schema_version, self.config_store.expected_version)
            self._log_migration(result)
            if result.outcome in (MigrationOutcome.MIGRATED_OK, MigrationOutcome.FIRST_RUN):
                self.config_store.load()
        except Exception as e:
            self.logger.warning(f"Configuration setup failed, continuing with defaults: {e}")

        try:
            self._passive_thread = self._background(self._passive_check)
        except Exception as e:
            self.logger.debug(f"Passive update check not armed: {e}")

        self.state = OrchestratorState.ARMED
        self._emit("info", "Amend is on standby, ready for updates on shutdown.")
        return result

    def _log_migration(self, result: MigrationResult) -> None:
        if result.outcome is MigrationOutcome.FIRST_RUN:
            self.logger.info("First run: default configuration written")
        elif result.outcome is MigrationOutcome.MIGRATED_OK:
            self.logger.info(f"Configuration upgraded from version {result.previous_version}; review the new file")
        elif result.outcome is MigrationOutcome.MIGRATED_FAILED:
            self.logger.warning("Configuration migration failed; the old configuration is still in use")
        elif result.newer_schema:
            self.logger.warning("Configuration was written by a newer Amend; update the plugin")

    def _passive_check(self) -> None:
        """啟用後的背景檢查：只提示，不修改任何檔案"""
        try:
            config = self.config_store.config
            runtime = parse_runtime_version(self.host.get_version(), self.host.get_brand())
            platform = resolve_platform(config, runtime.platform_identifier)
            self._check_target(runtime)
            latest = query_latest(platform, runtime.mc_version, self._sources_for(config))
            # 停用已開始時不再輸出過時的提示
            if self._closing.is_set():
                return
            if latest.ok and latest.build != runtime.build_number:
                message = (
                    f"{runtime.platform_display} build {latest.build} is available (running "
                    f"{runtime.build_number}); it will be installed when the server stops."
                )
                self.logger.info(message)
                self.host.notify_on_join(message)
        except AmendError as e:
            self.logger.debug(f"Passive update check skipped: {e}")
        except Exception as e:
            self.logger.debug(f"Passive update check failed: {e}")

    # ====== 停用 ======
    def on_disable(self) -> UpdateReport:
        """
        執行一次完整的更新檢查；任何錯誤都轉為報告，不會傳到宿主
        Run one full update check; every failure ends up in the report, never in the host
        """
        self._stop_passive_check()
        self.state = OrchestratorState.CHECKING
        try:
            report = self._check_and_update()
        except Exception as e:
            self.logger.exception(f"Update check aborted: {e}")
            report = UpdateReport(OrchestratorState.TERMINATED_UNSUPPORTED, message=str(e))

        self.state = report.state
        self._finish(report)
        return report

    def _stop_passive_check(self) -> None:
        self._closing.set()
        thread = self._passive_thread
        self._passive_thread = None
        if isinstance(thread, threading.Thread) and thread.is_alive() and thread is not threading.current_thread():
            thread.join(PASSIVE_JOIN_TIMEOUT)
            if thread.is_alive():
                self.logger.debug("Passive update check still running; its notice will be dropped")

    def _check_and_update(self) -> UpdateReport:
        config = self.config_store.reload()
        self._emit("info", "Started update check...")

        try:
            runtime = parse_runtime_version(self.host.get_version(), self.host.get_brand())
        except VersionParseError as e:
            return self._terminate(UpdateDecision.UNSUPPORTED_VERSION, e, shutdown=False)

        try:
            platform = resolve_platform(config, runtime.platform_identifier)
        except UnsupportedPlatformError as e:
            return self._terminate(
                UpdateDecision.UNSUPPORTED_PLATFORM, e, runtime=runtime, shutdown=config.shutdown_on_unsupported
            )

        try:
            self._check_target(runtime)
        except UnsupportedVersionError as e:
            return self._terminate(
                UpdateDecision.UNSUPPORTED_VERSION,
                e,
                runtime=runtime,
                platform=platform,
                shutdown=config.shutdown_on_unsupported,
            )

        self._emit("info", f"Current version: {runtime.platform_display} {runtime.mc_version} build {runtime.build_number}")

        latest = query_latest(platform, runtime.mc_version, self._sources_for(config))
        if not latest.ok:
            self._emit("warning", f"Could not determine the latest {platform.value} build ({latest.detail}); not updating.")
            return UpdateReport(
                OrchestratorState.TERMINATED_UNSUPPORTED,
                decision=UpdateDecision.SOURCE_UNREACHABLE,
                runtime=runtime,
                platform=platform,
                error=latest.error or ErrorCode.SOURCE_UNREACHABLE,
                message=latest.detail,
            )

        # 同一平台內只比較是否相等，建置編號不保證單調
        if latest.build == runtime.build_number:
            self._emit("info", "Server is up to date!")
            return UpdateReport(
                OrchestratorState.UP_TO_DATE,
                decision=UpdateDecision.UP_TO_DATE,
                runtime=runtime,
                platform=platform,
                latest_build=latest.build,
            )

        self._emit("warning", f"Version is NOT up to date! Newest {platform.value} build is {latest.build}")
        return self._apply_update(config, runtime, platform, latest.build)

    def _apply_update(
        self, config: Configuration, runtime: RuntimeVersion, platform: Platform, build: int
    ) -> UpdateReport:
        report = UpdateReport(
            OrchestratorState.UPDATING,
            decision=UpdateDecision.UPDATE_AVAILABLE,
            runtime=runtime,
            platform=platform,
            latest_build=build,
        )

        destination = self.server_dir / config.jar_file_name
        if not PathUtils.is_path_within(self.server_dir, destination, strict=False):
            report.error = ErrorCode.DOWNLOAD_FAILED
            report.message = f"jar-name {config.jar_file_name!r} points outside the server directory"
            self._emit("error", f"Refusing to update: {report.message}")
            return report

        sources = self._sources_for(config)
        url = sources[platform].download_url(runtime.mc_version, build)
        self._emit("info", f"Downloading update and applying to {config.jar_file_name}...")

        downloader = self._downloader or Downloader(timeout=config.request_timeout)
        if downloader.fetch_and_replace(url, destination):
            report.applied = True
            report.shutdown_requested = self.shutdown_after_update
            self._emit("info", "Update completed!")
        else:
            report.error = ErrorCode.DOWNLOAD_FAILED
            report.message = f"Download from {url} failed"
            self._emit("error", f"Update failed; {config.jar_file_name} was left unchanged.")
        return report

    # ====== 共用步驟 ======
    def _check_target(self, runtime: RuntimeVersion) -> None:
        """跨 Minecraft 版本一律不比較、不更新"""
        if runtime.mc_version != self.target_mc_version:
            raise UnsupportedVersionError(
                f"Minecraft {runtime.mc_version} is not supported by this build of Amend "
                f"(built for {self.target_mc_version}); download the matching Amend release"
            )

    def _sources_for(self, config: Configuration) -> Mapping[Platform, UpdateSource]:
        if self._sources is not None:
            return self._sources
        return {platform: source.with_timeout(config.request_timeout) for platform, source in SOURCES.items()}

    def _terminate(
        self,
        decision: UpdateDecision,
        error: AmendError,
        *,
        runtime: RuntimeVersion | None = None,
        platform: Platform | None = None,
        shutdown: bool,
    ) -> UpdateReport:
        self._emit("error", f"{error.code.value}: {error}")
        return UpdateReport(
            OrchestratorState.TERMINATED_UNSUPPORTED,
            decision=decision,
            runtime=runtime,
            platform=platform,
            shutdown_requested=shutdown,
            error=error.code,
            message=str(error),
        )

    def _finish(self, report: UpdateReport) -> None:
        """回報結果並依策略要求宿主關閉"""
        try:
            self.host.submit_metrics(
                {
                    "decision": report.decision.value if report.decision else "error",
                    "platform": report.platform.value if report.platform else "unknown",
                    "applied": report.applied,
                }
            )
        except Exception as e:
            self.logger.debug(f"Metrics hook failed: {e}")

        if report.shutdown_requested:
            self.logger.info("Requesting server shutdown")
            try:
                self.host.request_shutdown()
            except Exception as e:
                self.logger.warning(f"Host shutdown request failed: {e}")
