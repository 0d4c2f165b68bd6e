"""宿主伺服器介面
定義外掛向宿主取得的輸入與可呼叫的鉤子；實際實作由宿主端提供
Host server bridge
Declares the inputs the plugin reads from the host and the hooks it may call
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Callable


class HostBridge(ABC):
    """宿主協作者基底類別

    必須實作：get_version、get_brand、log、request_shutdown。
    notify_on_join 與 submit_metrics 預設為空操作。
    """

    @abstractmethod
    def get_version(self) -> str:
        """目前伺服器版本字串，例如 ``1.21.4-196``"""

    @abstractmethod
    def get_brand(self) -> str:
        """伺服器品牌名稱，例如 ``Paper``"""

    @abstractmethod
    def log(self, level: str, message: str) -> None:
        ...

    @abstractmethod
    def request_shutdown(self) -> None:
        ...

    # ====== 可選鉤子 ======
    def notify_on_join(self, message: str) -> None:
        """玩家加入時顯示的提示（空操作）"""

    def submit_metrics(self, data: dict[str, Any]) -> None:
        """統計資料（空操作）"""


class MessagePacer:
    """「輸出訊息後可選擇暫停」的顯示策略，讓管理員有時間閱讀主控台

    只在宿主介面層使用，不放在更新判斷邏輯內。
    """

    def __init__(self, delay: float = 0.0, sleep: Callable[[float], None] = time.sleep):
        self.delay = max(0.0, delay)
        self._sleep = sleep

    def __call__(self, message: str) -> None:
        if self.delay > 0:
            self._sleep(self.delay)
