#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
常數定義模組
提供專案中常用的常數定義，避免重複定義
Constants Module
Provides common constants used across the project to avoid duplication
"""

# ====== 容量單位常數 Size Unit Constants ======
KB = 1024
MB = KB * 1024

# ====== 網路常數 Network Constants ======
# 查詢與下載的連線 / 讀取逾時（秒）
DEFAULT_TIMEOUT = 10
# 串流下載的資料塊大小（位元組）
DOWNLOAD_CHUNK_SIZE = 65536
