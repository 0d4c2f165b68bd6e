#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
核心模組套件
提供版本解析、設定遷移、遠端來源、下載與更新流程協調
Core Modules Package
Provides version parsing, configuration migration, remote sources, downloading and update orchestration
"""

from __future__ import annotations
from typing import Dict, Tuple
from .. import lazy_exports

_EXPORTS: Dict[str, Tuple[str, str]] = {
    "AmendPlugin": (".plugin", "AmendPlugin"),
    "ConfigStore": (".config_store", "ConfigStore"),
    "Downloader": (".downloader", "Downloader"),
    "HostBridge": (".host", "HostBridge"),
    "MessagePacer": (".host", "MessagePacer"),
    "Orchestrator": (".orchestrator", "Orchestrator"),
    "UpdateSource": (".update_source", "UpdateSource"),
    "parse_runtime_version": (".version_parser", "parse_runtime_version"),
    "resolve_platform": (".orchestrator", "resolve_platform"),
}

__getattr__, __dir__, __all__ = lazy_exports(globals(), __name__, _EXPORTS)
