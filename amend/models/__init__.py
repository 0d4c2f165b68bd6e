"""資料模型定義 (package)

對外匯入方式：
`from amend.models import RuntimeVersion, Configuration, UpdateDecision`
"""

from .models import (
    Configuration,
    ErrorCode,
    LatestBuildResult,
    MigrationOutcome,
    MigrationResult,
    OrchestratorState,
    Platform,
    PlatformSelection,
    RuntimeVersion,
    UpdateDecision,
    UpdateReport,
)

__all__ = [
    "Configuration",
    "ErrorCode",
    "LatestBuildResult",
    "MigrationOutcome",
    "MigrationResult",
    "OrchestratorState",
    "Platform",
    "PlatformSelection",
    "RuntimeVersion",
    "UpdateDecision",
    "UpdateReport",
]
