#!/usr/bin/env python3
"""版本資訊與外掛常數定義
定義外掛版本號、名稱、編譯目標 Minecraft 版本與設定檔結構版本
Version Information and Plugin Constants Definition
Defines plugin version, name, compiled-in Minecraft target and configuration schema version
"""

# 外掛版本字串
APP_VERSION = "2.4.0"
# 外掛顯示名稱
APP_NAME = "Amend"
# 外掛的簡要描述
APP_DESCRIPTION = "Paper / Purpur 關機自動更新"
# 本版本唯一支援的 Minecraft 版本（跨版本一律不更新）
TARGET_MC_VERSION = "1.21.4"
# 設定檔結構版本
CONFIG_VERSION = 2
# 專案首頁
HOMEPAGE = "https://amend.mrtron.dev"
