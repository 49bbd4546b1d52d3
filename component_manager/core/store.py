"""知识库查询接口 + YAML 实现

KnowledgeStore 是安装核心消费的外部接口（按标识符查实体、类成员、
属性内容、出边关系、导入声明式文件）。核心只依赖协议。

YamlKnowledgeStore 是一个基于 YAML 文件的简单实现，文件格式:

    components:
      part_ui:
        classes: [concept_reusable_component]
        attributes:
          nrel_component_address: https://github.com/ostis-ai/part-ui
        relations:
          nrel_installation_method: concept_installation_method_git
          nrel_component_dependencies: [part_web_core]
    loaded_sources:
      - path: data/specifications/part-ui/ui.scs
        sha256: ...
"""

from __future__ import annotations

import hashlib
import logging
import threading
from pathlib import Path
from typing import Any, Protocol

import yaml

from component_manager.core.exceptions import ArtifactImportError
from component_manager.core.models import EntityRef
from component_manager.utils.yaml_io import load_yaml, save_yaml

logger = logging.getLogger(__name__)


class KnowledgeStore(Protocol):
    """知识库协议 — 查询接口 + 声明式文件导入边界"""

    def find_by_identifier(self, name: str) -> EntityRef | None:
        ...

    def has_class_membership(self, entity: EntityRef, class_ref: str) -> bool:
        ...

    def get_attribute_content(self, entity: EntityRef, attribute_kind: str) -> str:
        """属性内容，不存在时返回空字符串"""
        ...

    def get_outgoing_relation(self, entity: EntityRef, relation_kind: str) -> list[EntityRef]:
        ...

    def get_identifier(self, entity: EntityRef) -> str:
        ...

    def load_declarative_file(self, path: Path) -> None:
        """导入一个声明式文件，格式错误抛 ArtifactImportError"""
        ...


class YamlKnowledgeStore:
    """YAML 文件知识库

    store_file 为空时只在内存中工作（测试用）。所有访问由同一把锁串行化，
    多个顶层安装请求可以并发共享同一个实例。
    """

    section_key = "components"
    sources_key = "loaded_sources"

    def __init__(self, store_file: str = "", data: dict[str, Any] | None = None) -> None:
        self.store_file = Path(store_file) if store_file else None
        if data is not None:
            self._data: dict[str, Any] = data
        elif self.store_file is not None:
            self._data = load_yaml(self.store_file)
        else:
            self._data = {}
        # 裸键 (components:) 在 YAML 中解析为 None
        if not isinstance(self._data.get(self.section_key), dict):
            self._data[self.section_key] = {}
        if not isinstance(self._data.get(self.sources_key), list):
            self._data[self.sources_key] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # 内部访问
    # ------------------------------------------------------------------

    def _section(self) -> dict[str, dict[str, Any]]:
        result: dict[str, dict[str, Any]] = self._data[self.section_key]
        return result

    def _entry(self, entity: EntityRef) -> dict[str, Any]:
        return self._section().get(entity.identifier) or {}

    def _save(self) -> None:
        if self.store_file is None:
            return
        save_yaml(self.store_file, self._data)

    # ------------------------------------------------------------------
    # 查询接口
    # ------------------------------------------------------------------

    def find_by_identifier(self, name: str) -> EntityRef | None:
        with self._lock:
            if name and name in self._section():
                return EntityRef(name)
            return None

    def has_class_membership(self, entity: EntityRef, class_ref: str) -> bool:
        with self._lock:
            return class_ref in (self._entry(entity).get("classes") or [])

    def get_attribute_content(self, entity: EntityRef, attribute_kind: str) -> str:
        with self._lock:
            value = (self._entry(entity).get("attributes") or {}).get(attribute_kind)
            return "" if value is None else str(value).strip()

    def get_outgoing_relation(self, entity: EntityRef, relation_kind: str) -> list[EntityRef]:
        with self._lock:
            targets = (self._entry(entity).get("relations") or {}).get(relation_kind)
            if not targets:
                return []
            if isinstance(targets, str):
                targets = [targets]
            return [EntityRef(str(t)) for t in targets]

    def get_identifier(self, entity: EntityRef) -> str:
        return entity.identifier

    # ------------------------------------------------------------------
    # 导入边界
    # ------------------------------------------------------------------

    def load_declarative_file(self, path: Path) -> None:
        """登记一个声明式文件（文法解析不在本库范围内，只保证是可读的 UTF-8 文本）"""
        try:
            raw = path.read_bytes()
            raw.decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ArtifactImportError(f"无法解析声明式文件: {path} - {e}", [str(path)]) from e

        record = {"path": str(path), "sha256": hashlib.sha256(raw).hexdigest()}
        with self._lock:
            sources: list[dict[str, str]] = self._data[self.sources_key]
            sources[:] = [s for s in sources if s.get("path") != record["path"]]
            sources.append(record)
            try:
                self._save()
            except (OSError, yaml.YAMLError) as e:
                raise ArtifactImportError(
                    f"导入记录写入知识库失败: {path} - {e}", [str(path)],
                ) from e
        logger.debug("已导入: %s", path)

    def loaded_sources(self) -> list[str]:
        """已导入的声明式文件路径（按导入顺序）"""
        with self._lock:
            return [s["path"] for s in self._data[self.sources_key]]
