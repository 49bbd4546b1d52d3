"""声明式文件导入器

扫描组件目录顶层（不递归）的声明式文件，按文件名字典序逐个导入知识库。

两种模式:
  - 默认: 遇到第一个格式错误的文件立即中止
  - best_effort: 跳过错误文件继续导入，全部处理完后汇总报错
"""

from __future__ import annotations

import logging
from pathlib import Path

from component_manager.core.exceptions import ArtifactImportError
from component_manager.core.store import KnowledgeStore

logger = logging.getLogger(__name__)


class ScsImporter:
    """声明式文件导入器"""

    def __init__(
        self,
        store: KnowledgeStore,
        extension: str = ".scs",
        best_effort: bool = False,
    ) -> None:
        self.store = store
        self.extension = extension
        self.best_effort = best_effort

    def list_files(self, directory: Path) -> list[Path]:
        if not directory.is_dir():
            return []
        return sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix == self.extension
        )

    def import_all(self, directory: Path) -> int:
        """导入目录下全部声明式文件，返回成功导入的文件数"""
        files = self.list_files(directory)
        if not files:
            logger.info("目录中没有 %s 文件: %s", self.extension, directory)
            return 0

        loaded = 0
        failed: list[str] = []
        for path in files:
            try:
                self.store.load_declarative_file(path)
            except ArtifactImportError as e:
                if not self.best_effort:
                    raise ArtifactImportError(str(e), [str(path)], loaded) from e
                logger.warning("跳过无法导入的文件: %s - %s", path, e)
                failed.append(str(path))
                continue
            loaded += 1

        if failed:
            raise ArtifactImportError(
                f"{len(failed)} 个文件导入失败（已导入 {loaded} 个）: {', '.join(failed)}",
                failed,
                loaded,
            )
        logger.info("已导入 %d 个文件: %s", loaded, directory)
        return loaded
