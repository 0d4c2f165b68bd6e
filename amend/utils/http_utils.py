#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HTTP 網路請求工具模組
提供標準化的 HTTP 請求功能，包含文字 / JSON 取得與串流回應
HTTP Network Request Utilities Module
Provides standardized HTTP request functionality including text / JSON retrieval and streamed responses
"""
# ====== 標準函式庫 ======
from typing import Any, Dict, Optional
import requests
# ====== 專案內部模組 ======
from ..version_info import APP_NAME, APP_VERSION, HOMEPAGE
from .constants import DEFAULT_TIMEOUT
from .logger import get_logger

logger = get_logger().bind(component="HTTPUtils")

DEFAULT_HEADERS = {
    "User-Agent": f"{APP_NAME}/{APP_VERSION} ({HOMEPAGE})",
    "Accept": "application/json, text/plain, */*",
}


class HTTPUtils:
    """
    HTTP 網路請求工具類別，提供各種 HTTP 操作的統一介面
    HTTP network request utility class providing unified interface for various HTTP operations
    """

    @staticmethod
    def _merge_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = dict(DEFAULT_HEADERS)
        if headers:
            merged.update(headers)
        return merged

    # ====== 內容資料請求 ======
    # 發送 GET 請求取得 Response 物件
    @staticmethod
    def get_content(
        url: str, timeout: int = DEFAULT_TIMEOUT, stream: bool = False, headers: Optional[Dict[str, str]] = None
    ) -> Optional[requests.Response]:
        """
        發送 HTTP GET 請求並回傳完整的 Response 物件
        Send HTTP GET request and return complete Response object

        Args:
            url (str): 請求的目標 URL
            timeout (int): 連線 / 讀取逾時（秒）
            stream (bool): 是否使用串流模式下載
            headers (Optional[Dict[str, str]]): 可選的 HTTP 請求標頭

        Returns:
            Optional[requests.Response]: 成功時返回 Response 物件，失敗時返回 None
        """
        if not url or not isinstance(url, str):
            logger.error("HTTP GET failed: invalid URL argument")
            return None
        if timeout <= 0:
            timeout = DEFAULT_TIMEOUT

        try:
            response = requests.get(url, timeout=timeout, stream=stream, headers=HTTPUtils._merge_headers(headers))
            response.raise_for_status()
            return response
        except requests.Timeout:
            logger.warning(f"HTTP GET timed out after {timeout}s ({url})")
            return None
        except requests.RequestException as e:
            logger.warning(f"HTTP GET failed ({url}): {e}")
            return None

    # ====== 文字資料請求 ======
    @staticmethod
    def get_text(url: str, timeout: int = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> Optional[str]:
        """
        發送 HTTP GET 請求並回傳文字內容
        Send HTTP GET request and return the body as text

        Returns:
            Optional[str]: 成功時返回內容字串，失敗時返回 None
        """
        response = HTTPUtils.get_content(url, timeout=timeout, headers=headers)
        if response is None:
            return None
        try:
            return response.text
        except requests.RequestException as e:
            logger.warning(f"Reading HTTP body failed ({url}): {e}")
            return None

    # ====== JSON 資料請求 ======
    @staticmethod
    def get_json(url: str, timeout: int = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> Optional[Any]:
        """
        發送 HTTP GET 請求並解析回傳的 JSON 資料
        Send HTTP GET request and parse returned JSON data

        Returns:
            Optional[Any]: 成功時返回解析後的 JSON，失敗時返回 None
        """
        response = HTTPUtils.get_content(url, timeout=timeout, headers=headers)
        if response is None:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"HTTP response is not valid JSON ({url}): {e}")
            return None


# ====== 模組級別函數別名 ======
get_content = HTTPUtils.get_content
get_text = HTTPUtils.get_text
get_json = HTTPUtils.get_json
