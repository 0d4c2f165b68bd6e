#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
伺服器 jar 下載模組
串流下載到同目錄暫存檔，完整寫入後才原子取代目標檔案
Server Jar Download Module
Streams into a temp file beside the destination and atomically replaces it only after a complete transfer
"""
# ====== 標準函式庫 ======
from pathlib import Path
import os
import tempfile
import requests
# ====== 專案內部模組 ======
from ..utils.constants import DEFAULT_TIMEOUT, DOWNLOAD_CHUNK_SIZE
from ..utils.http_utils import HTTPUtils
from ..utils.logger import get_logger
from ..utils.path_utils import PathUtils
from .errors import DownloadIncompleteError

logger = get_logger().bind(component="Downloader")


class Downloader:
    """
    下載並原子替換本機檔案
    Downloads an artifact and atomically replaces a local file
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, chunk_size: int = DOWNLOAD_CHUNK_SIZE):
        self.timeout = timeout if timeout > 0 else DEFAULT_TIMEOUT
        self.chunk_size = chunk_size if chunk_size > 0 else DOWNLOAD_CHUNK_SIZE

    @staticmethod
    def _wire_bytes(response, decoded: int) -> int | None:
        """實際從網路讀取的位元組數；有 Content-Encoding 且無法取得時回傳 None"""
        if not response.headers.get("Content-Encoding"):
            return decoded
        tell = getattr(getattr(response, "raw", None), "tell", None)
        return tell() if callable(tell) else None

    def _stream_to(self, url: str, handle) -> int:
        """將遠端內容寫入已開啟的檔案，回傳寫入位元組數"""
        response = HTTPUtils.get_content(url, timeout=self.timeout, stream=True)
        if response is None:
            raise DownloadIncompleteError(f"Could not start download from {url}")

        written = 0
        with response:
            expected = response.headers.get("Content-Length")
            try:
                for chunk in response.iter_content(chunk_size=self.chunk_size):
                    if chunk:
                        handle.write(chunk)
                        written += len(chunk)
            except requests.RequestException as e:
                raise DownloadIncompleteError(f"Transfer interrupted after {written} bytes: {e}") from e
            received = self._wire_bytes(response, written)

        # Content-Length 計算的是傳輸位元組（gzip 等編碼前），不是解碼後的內容
        if expected is not None and expected.isdigit() and received is not None and int(expected) != received:
            raise DownloadIncompleteError(f"Received {received} of {expected} bytes")
        if written == 0:
            raise DownloadIncompleteError("Server returned an empty body")
        return written

    # 下載並替換
    def fetch_and_replace(self, url: str, destination: Path) -> bool:
        """
        下載 url 並取代 destination；失敗時目標檔案保持原樣
        Download url and replace destination; on failure the destination is left untouched

        Args:
            url (str): 下載來源 URL
            destination (Path): 要取代的本機檔案

        Returns:
            bool: 成功返回 True，失敗返回 False (DOWNLOAD_FAILED)
        """
        destination = Path(destination)
        tmp_name = None
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{destination.name}.", suffix=".part", dir=destination.parent)
            with os.fdopen(fd, "wb") as f:
                written = self._stream_to(url, f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, destination)
            tmp_name = None
            logger.info(f"Downloaded {written} bytes into {destination.name}")
            return True
        except DownloadIncompleteError as e:
            logger.error(f"DOWNLOAD_FAILED: {e}; {destination.name} left unchanged")
            return False
        except OSError as e:
            logger.error(f"DOWNLOAD_FAILED: I/O error while replacing {destination.name}: {e}")
            return False
        finally:
            if tmp_name is not None:
                PathUtils.delete_path(tmp_name)
