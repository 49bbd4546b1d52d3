"""统一异常体系

所有业务异常继承 ComponentManagerError。
叶子层（知识库、拉取器、导入器、shell）抛出异常，
依赖解析器在边界处将其转换为 InstallFailure 记录，不向上冒泡到 CLI。
"""

from __future__ import annotations


class ComponentManagerError(Exception):
    """组件管理器基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(ComponentManagerError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ComponentNotFoundError(ComponentManagerError):
    """组件标识符在知识库中不存在"""

    code = "NOT_FOUND"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"组件不存在: {identifier}")
        self.identifier = identifier


class ValidationError(ComponentManagerError):
    """组件结构校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"组件 '{identifier}' 校验失败: {reason}")
        self.identifier = identifier
        self.reason = reason


class FetchError(ComponentManagerError):
    """制品仓库拉取失败（网络不可达 / clone 非零退出 / 目录冲突）"""

    code = "FETCH_ERROR"


class ArtifactImportError(ComponentManagerError):
    """声明式文件导入失败"""

    code = "IMPORT_ERROR"

    def __init__(
        self, message: str, failed_files: list[str] | None = None, loaded: int = 0,
    ) -> None:
        super().__init__(message)
        self.failed_files = failed_files or []
        self.loaded = loaded


class ExecutionError(ComponentManagerError):
    """外部命令执行失败"""

    code = "EXECUTION_ERROR"
