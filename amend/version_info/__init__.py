"""版本資訊與外掛常數 (package)

對外匯入方式：
from amend.version_info import APP_NAME, APP_VERSION, TARGET_MC_VERSION, ...
"""

from .version_info import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    CONFIG_VERSION,
    HOMEPAGE,
    TARGET_MC_VERSION,
)

__all__ = [
    "APP_DESCRIPTION",
    "APP_NAME",
    "APP_VERSION",
    "CONFIG_VERSION",
    "HOMEPAGE",
    "TARGET_MC_VERSION",
]
