"""核心数据模型

组件描述、安装结果、拉取结果等数据类集中定义，
知识库适配器、校验器、解析器、编排器统一从此处导入。
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# =========================================================================
# 知识库实体
# =========================================================================


@dataclass(frozen=True)
class EntityRef:
    """知识库实体句柄（不透明，仅用于回传给知识库查询接口）"""

    identifier: str


@dataclass(frozen=True)
class ComponentDescriptor:
    """组件描述 — 一次查询得到的只读快照，每次安装重新查询，不跨调用缓存"""

    identifier: str
    entity: EntityRef | None = None
    is_reusable: bool = False
    address: str = ""               # 制品地址，如 https://github.com/org/liby
    installation_method: str = ""   # 安装方法引用
    dependencies: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.entity is not None


class ValidationFailure(str, Enum):
    """组件结构校验失败原因（按检查顺序）"""

    NOT_FOUND = "not_found"
    NOT_REUSABLE = "not_reusable"
    NO_ADDRESS = "no_address"
    NO_INSTALLATION_METHOD = "no_installation_method"


# =========================================================================
# 安装结果
# =========================================================================

# 失败发生的阶段
STAGE_LOOKUP = "lookup"
STAGE_VALIDATE = "validate"
STAGE_DEPENDENCY = "dependency"
STAGE_FETCH = "fetch"
STAGE_IMPORT = "import"


@dataclass
class InstallFailure:
    """单个组件的失败记录（标识符 + 阶段 + 原因）"""

    identifier: str
    stage: str
    reason: str

    def __str__(self) -> str:
        return f"{self.identifier} [{self.stage}] {self.reason}"


@dataclass
class InstallResult:
    """安装结果

    installed 的顺序即依赖优先顺序。空列表 + success=True 表示无事可做，
    失败只看 success，不看列表是否为空。
    """

    installed: list[str] = field(default_factory=list)
    success: bool = True
    failures: list[InstallFailure] = field(default_factory=list)

    @classmethod
    def ok(cls, installed: list[str] | None = None) -> InstallResult:
        return cls(installed=list(installed or []))

    @classmethod
    def failed(cls, identifier: str, stage: str, reason: str) -> InstallResult:
        return cls(success=False, failures=[InstallFailure(identifier, stage, reason)])

    def extend(self, other: InstallResult) -> None:
        """拼接下游结果（保持顺序，失败具有传染性）"""
        self.installed.extend(other.installed)
        self.failures.extend(other.failures)
        self.success = self.success and other.success

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "installed": list(self.installed),
            "failures": [
                {"identifier": f.identifier, "stage": f.stage, "reason": f.reason}
                for f in self.failures
            ],
        }


@dataclass
class FetchResult:
    """制品拉取结果"""

    directory: Path
    newly_created: bool


# =========================================================================
# 安装任务
# =========================================================================


class InstallationTask:
    """一次顶层安装请求的解析状态

    visited 在整个依赖图遍历期间共享，用于打断环和对菱形依赖去重。
    claim() 是原子的 check-then-insert。
    """

    def __init__(self, root: str) -> None:
        self.root = root
        self._visited: set[str] = set()
        self._lock = threading.Lock()

    def claim(self, identifier: str) -> bool:
        """首次访问返回 True 并登记；已访问过返回 False"""
        with self._lock:
            if identifier in self._visited:
                return False
            self._visited.add(identifier)
            return True

    @property
    def visited(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._visited)
