#!/usr/bin/env python3
"""路徑工具模組
Path Utilities Module
"""

import os
import tempfile
from pathlib import Path


class PathUtils:
    """路徑處理工具類別，提供安全路徑檢查與原子寫入"""

    @staticmethod
    def is_path_within(base_dir: Path, target_path: Path, *, strict: bool = True) -> bool:
        """檢查 target_path 是否位於 base_dir 之下"""
        try:
            base_resolved = base_dir.resolve(strict=True)
            target_resolved = target_path.resolve(strict=strict)
        except OSError:
            return False

        try:
            target_resolved.relative_to(base_resolved)
            return True
        except ValueError:
            return False

    @staticmethod
    def write_text_atomic(path: Path | str, content: str, encoding: str = "utf-8") -> None:
        """
        原子寫入文字檔案：先寫入同目錄暫存檔，fsync 後再取代目標
        Atomically write a text file: write a sibling temp file, fsync, then replace the target

        Raises:
            OSError: 寫入或取代失敗時（暫存檔會被清除）
        """
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
        try:
            with os.fdopen(fd, "w", encoding=encoding) as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, p)
        except BaseException:
            PathUtils.delete_path(tmp_name)
            raise

    @staticmethod
    def read_text_file(path: Path, encoding: str = "utf-8") -> str | None:
        """讀取文字檔案，不存在時回傳 None"""
        if not path.exists():
            return None
        return path.read_text(encoding=encoding)

    @staticmethod
    def delete_path(path: Path | str) -> bool:
        """刪除檔案"""
        try:
            p = Path(path)
            if p.exists():
                p.unlink()
            return True
        except OSError:
            return False
