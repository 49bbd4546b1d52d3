"""测试共享 fixture — 假 git 执行器 + 内存知识库

整体架构:

  components dict          make_container()              测试用例
  ┌──────────────┐    ┌─────────────────────────┐    ┌──────────────────────┐
  │ AppX:        │───>│ YamlKnowledgeStore(data)│    │ c, git = make_...    │
  │   deps: LibY │    │ FakeGit (不访问网络)     │───>│ c.installer.install  │
  │ LibY:        │    │ ServiceContainer        │    │ assert git.clones    │
  │   address    │    └─────────────────────────┘    └──────────────────────┘
  └──────────────┘

FakeGit 收到 git clone 时在目标目录写入预设的声明式文件，
失败地址返回非零退出码并留下半成品目录（用于验证清理）。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from component_manager.core.config import Config
from component_manager.core.store import YamlKnowledgeStore
from component_manager.services.container import ServiceContainer
from component_manager.utils.shell import CommandResult

DEFAULT_FILES: dict[str, str | bytes] = {"main.scs": "concept_x -> y;;\n"}


class FakeGit:
    """记录调用的假命令执行器"""

    def __init__(
        self,
        files: dict[str, dict[str, str | bytes]] | None = None,
        fail: tuple[str, ...] = (),
    ) -> None:
        self.files = files or {}
        self.fail = set(fail)
        self.calls: list[list[str]] = []

    def execute(self, cmd: list[str], *, cwd: str = ".", timeout: int | None = None) -> CommandResult:
        self.calls.append(list(cmd))
        if cmd[:2] != ["git", "clone"]:
            return CommandResult(0, "", "")

        address, dest = cmd[-2], Path(cmd[-1])
        dest.mkdir(parents=True, exist_ok=True)
        if address in self.fail:
            return CommandResult(128, "", f"fatal: repository '{address}' not found")

        for name, content in self.files.get(address, DEFAULT_FILES).items():
            if isinstance(content, bytes):
                (dest / name).write_bytes(content)
            else:
                (dest / name).write_text(content, encoding="utf-8")
        return CommandResult(0, "", "")

    @property
    def clones(self) -> list[str]:
        return [c[-2] for c in self.calls if c[:2] == ["git", "clone"]]


def component(
    address: str = "",
    deps: tuple[str, ...] | list[str] = (),
    *,
    reusable: bool = True,
    method: str = "concept_installation_method_git",
) -> dict[str, Any]:
    """构造知识库中的一个组件条目"""
    entry: dict[str, Any] = {
        "classes": ["concept_reusable_component"] if reusable else ["concept_component"],
        "attributes": {},
        "relations": {},
    }
    if address:
        entry["attributes"]["nrel_component_address"] = address
    if method:
        entry["relations"]["nrel_installation_method"] = method
    if deps:
        entry["relations"]["nrel_component_dependencies"] = list(deps)
    return entry


def gh(name: str) -> str:
    return f"https://github.com/org/{name}"


MakeContainer = Callable[..., "tuple[ServiceContainer, FakeGit]"]


@pytest.fixture()
def make_container(tmp_path: Path) -> MakeContainer:
    """按组件定义构造容器，返回 (container, fake_git)"""

    def _make(
        components: dict[str, dict[str, Any]],
        *,
        files: dict[str, dict[str, str | bytes]] | None = None,
        fail: tuple[str, ...] = (),
        **config: Any,
    ) -> tuple[ServiceContainer, FakeGit]:
        cfg = Config(
            specifications_dir=str(tmp_path / "specs"),
            store_file="",
            **config,
        )
        git = FakeGit(files=files, fail=fail)
        store = YamlKnowledgeStore(data={"components": components})
        return ServiceContainer(config=cfg, store=store, executor=git), git

    return _make
