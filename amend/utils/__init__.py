#!/usr/bin/env python3
"""工具模組套件
提供 Amend 外掛的日誌、HTTP 與路徑工具
Utility Modules Package
Provides logging, HTTP and path utilities for the Amend plugin

Logger can be imported conveniently:
    from amend.utils import get_logger
    logger = get_logger().bind(component="ComponentName")
"""

from __future__ import annotations

from .. import lazy_exports

_EXPORTS: dict[str, tuple[str, str]] = {
    # logger
    "get_logger": (".logger", "get_logger"),
    "LoggerConfig": (".logger", "LoggerConfig"),
    # http
    "HTTPUtils": (".http_utils", "HTTPUtils"),
    # paths
    "PathUtils": (".path_utils", "PathUtils"),
    "RuntimePaths": (".runtime_paths", "RuntimePaths"),
}

__getattr__, __dir__, __all__ = lazy_exports(globals(), __name__, _EXPORTS)
