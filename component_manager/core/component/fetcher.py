"""组件制品拉取器

职责:
- 识别代码托管仓库地址（仅配置的前缀触发下载，其他地址视为无需下载）
- 地址 -> 本地目录的确定性映射: <specifications_dir>/<仓库名>
- 目录已存在则直接复用，不再 clone（幂等）
- 同一目录的检查与创建在进程内加锁，避免并发重复 clone
"""

from __future__ import annotations

import logging
import shutil
import threading
from pathlib import Path

from component_manager.core.exceptions import ExecutionError, FetchError
from component_manager.core.models import FetchResult
from component_manager.utils.net import (
    is_repository_address,
    repository_dir_name,
    validate_url_scheme,
)
from component_manager.utils.shell import CommandExecutor, run_cmd

logger = logging.getLogger(__name__)

# 记录目录对应的仓库地址，保证一个目录只对应一个地址
SOURCE_MARKER = ".component_source"


def _normalize(address: str) -> str:
    return address.strip().rstrip("/").removesuffix(".git")


class ArtifactFetcher:
    """组件制品拉取器 - 本地优先，不存在时 git clone"""

    def __init__(
        self,
        specifications_dir: Path,
        prefixes: list[str],
        executor: CommandExecutor | None = None,
        timeout: int | None = None,
    ) -> None:
        self.specifications_dir = Path(specifications_dir)
        self.prefixes = list(prefixes)
        self.executor = executor
        self.timeout = timeout
        self._dir_locks: dict[Path, threading.Lock] = {}
        self._dir_locks_guard = threading.Lock()

    def _directory_lock(self, directory: Path) -> threading.Lock:
        key = directory.resolve()
        with self._dir_locks_guard:
            lock = self._dir_locks.get(key)
            if lock is None:
                lock = self._dir_locks[key] = threading.Lock()
            return lock

    def local_path(self, address: str) -> Path:
        """计算地址对应的本地目录（不访问文件系统）"""
        return self.specifications_dir / repository_dir_name(address)

    def fetch(self, address: str) -> FetchResult | None:
        """拉取组件仓库，返回本地目录；非仓库地址返回 None"""
        if not is_repository_address(address, self.prefixes):
            logger.info("非可识别的仓库地址，跳过下载: %s", address)
            return None

        validate_url_scheme(address, context="component fetch")
        directory = self.local_path(address)

        with self._directory_lock(directory):
            if directory.exists():
                self._check_source(directory, address)
                logger.info("本地已存在，直接使用: %s -> %s", address, directory)
                return FetchResult(directory=directory, newly_created=False)

            self._clone(address, directory)
            try:
                (directory / SOURCE_MARKER).write_text(address + "\n", encoding="utf-8")
            except OSError as e:
                shutil.rmtree(directory, ignore_errors=True)
                raise FetchError(f"无法写入来源标记: {directory} - {e}") from e
            logger.info("已拉取: %s -> %s", address, directory)
            return FetchResult(directory=directory, newly_created=True)

    @staticmethod
    def _check_source(directory: Path, address: str) -> None:
        """已存在的目录若记录了另一个地址，说明仓库名冲突"""
        marker = directory / SOURCE_MARKER
        if not marker.is_file():
            return
        try:
            recorded = marker.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(f"无法读取来源标记: {marker} - {e}") from e
        if recorded and _normalize(recorded) != _normalize(address):
            raise FetchError(
                f"目录 {directory} 已被 {recorded} 占用，无法用于 {address}"
            )

    def _clone(self, address: str, directory: Path) -> None:
        try:
            directory.parent.mkdir(parents=True, exist_ok=True)
            run_cmd(
                ["git", "clone", "--depth", "1", address, str(directory)],
                cwd=str(directory.parent),
                timeout=self.timeout,
                label="git clone",
                executor=self.executor,
            )
        except (ExecutionError, OSError) as e:
            shutil.rmtree(directory, ignore_errors=True)
            raise FetchError(f"拉取失败: {address} - {e}") from e

        if not directory.is_dir():
            raise FetchError(f"clone 完成但目录不存在: {directory}")
