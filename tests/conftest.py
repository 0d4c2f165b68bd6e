from __future__ import annotations

from typing import Any

import pytest
from amend.core.config_store import ConfigStore, default_configuration
from amend.core.host import HostBridge
from amend.models import LatestBuildResult, Platform, PlatformSelection
from amend.version_info import TARGET_MC_VERSION


class FakeHost(HostBridge):
    def __init__(self, version: str = f"{TARGET_MC_VERSION}-42", brand: str = "Paper"):
        self.version = version
        self.brand = brand
        self.logs: list[tuple[str, str]] = []
        self.notices: list[str] = []
        self.metrics: list[dict[str, Any]] = []
        self.shutdowns = 0

    def get_version(self) -> str:
        return self.version

    def get_brand(self) -> str:
        return self.brand

    def log(self, level: str, message: str) -> None:
        self.logs.append((level, message))

    def request_shutdown(self) -> None:
        self.shutdowns += 1

    def notify_on_join(self, message: str) -> None:
        self.notices.append(message)

    def submit_metrics(self, data: dict[str, Any]) -> None:
        self.metrics.append(data)


class FakeSource:
    def __init__(self, platform: Platform, build: int | None = 42, error=None):
        self.platform = platform
        self.build = build
        self.error = error
        self.calls: list[str] = []

    def query_latest(self, mc_version: str) -> LatestBuildResult:
        self.calls.append(mc_version)
        if self.build is None:
            return LatestBuildResult(self.platform, mc_version, error=self.error, detail="unreachable")
        return LatestBuildResult(self.platform, mc_version, build=self.build)

    def download_url(self, mc_version: str, build: int) -> str:
        return f"https://example.invalid/{self.platform.value}/{mc_version}/{build}"


class FakeDownloader:
    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.calls: list[tuple[str, Any]] = []

    def fetch_and_replace(self, url, destination) -> bool:
        self.calls.append((url, destination))
        return self.succeed


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def sources() -> dict[Platform, FakeSource]:
    return {platform: FakeSource(platform) for platform in Platform}


@pytest.fixture
def make_store(tmp_path):
    def _make(server_type: str = "AUTO", jar_name: str = "server.jar", **overrides) -> ConfigStore:
        store = ConfigStore(tmp_path / "plugins" / "Amend")
        config = default_configuration()
        config.raw_server_type = server_type
        config.platform_selection = PlatformSelection.from_config(server_type)
        config.jar_file_name = jar_name
        for key, value in overrides.items():
            setattr(config, key, value)
        assert store.save(config)
        return store

    return _make
