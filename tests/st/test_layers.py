"""分层模块测试：models / exceptions / config / logger / net"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from component_manager.core.config import Config, get_config, init_config
from component_manager.core.exceptions import (
    ArtifactImportError,
    ComponentManagerError,
    ComponentNotFoundError,
    ConfigError,
    ExecutionError,
    FetchError,
    ValidationError,
)
from component_manager.core.models import InstallationTask, InstallFailure, InstallResult
from component_manager.utils.logger import JSONFormatter, setup_logging
from component_manager.utils.net import is_repository_address, repository_dir_name

# =========================================================================
# models.py
# =========================================================================


class TestModels:
    def test_empty_success_differs_from_failure(self) -> None:
        nothing = InstallResult.ok()
        failed = InstallResult.failed("A", "fetch", "offline")
        assert nothing.installed == [] and nothing.success
        assert failed.installed == [] and not failed.success

    def test_extend_concatenates_and_propagates_failure(self) -> None:
        r = InstallResult.ok(["B"])
        r.extend(InstallResult.ok(["C"]))
        assert r.installed == ["B", "C"] and r.success
        r.extend(InstallResult.failed("D", "validate", "x"))
        assert not r.success
        assert r.failures == [InstallFailure("D", "validate", "x")]

    def test_to_dict(self) -> None:
        d = InstallResult.failed("D", "import", "bad").to_dict()
        assert d == {
            "success": False,
            "installed": [],
            "failures": [{"identifier": "D", "stage": "import", "reason": "bad"}],
        }

    def test_task_claim_once(self) -> None:
        task = InstallationTask("A")
        assert task.claim("A") is True
        assert task.claim("A") is False
        assert task.visited == frozenset({"A"})


# =========================================================================
# exceptions.py
# =========================================================================


class TestExceptions:
    @pytest.mark.parametrize(("exc", "code"), [
        (ConfigError("x"), "CONFIG_ERROR"),
        (ComponentNotFoundError("ui"), "NOT_FOUND"),
        (ValidationError("ui", "no address"), "VALIDATION_ERROR"),
        (FetchError("x"), "FETCH_ERROR"),
        (ArtifactImportError("x"), "IMPORT_ERROR"),
        (ExecutionError("x"), "EXECUTION_ERROR"),
    ])
    def test_hierarchy_and_codes(self, exc: ComponentManagerError, code: str) -> None:
        assert isinstance(exc, ComponentManagerError)
        assert exc.code == code

    def test_validation_error_context(self) -> None:
        e = ValidationError("ui", "组件地址缺失或为空")
        assert e.identifier == "ui"
        assert "ui" in str(e) and "地址" in str(e)


# =========================================================================
# config.py
# =========================================================================


class TestConfig:
    def test_defaults(self) -> None:
        cfg = Config()
        assert cfg.repository_prefixes == ["https://github.com/"]
        assert cfg.declarative_extension == ".scs"
        assert cfg.import_best_effort is False
        assert cfg.max_workers == 1

    def test_from_file_with_extra(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text(
            "specifications_dir: /srv/specs\n"
            "repository_prefixes: https://git.example.com/\n"
            "declarative_extension: gwf\n"
            "owner: kb-team\n"
        )
        cfg = Config.from_file(str(p))
        assert cfg.specifications_dir == "/srv/specs"
        assert cfg.repository_prefixes == ["https://git.example.com/"]
        assert cfg.declarative_extension == ".gwf"
        assert cfg.extra == {"owner": "kb-team"}

    def test_empty_prefix_list(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("repository_prefixes:\n")
        assert Config.from_file(str(p)).repository_prefixes == []

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert Config.from_file(str(tmp_path / "nonexist.yml")) == Config()

    def test_invalid_max_workers(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("max_workers: 0\n")
        with pytest.raises(ConfigError, match="max_workers"):
            Config.from_file(str(p))

    def test_init_config_replaces_global(self, tmp_path: Path) -> None:
        p = tmp_path / "cfg.yml"
        p.write_text("store_file: kb.yml\n")
        cfg = init_config(str(p))
        assert get_config() is cfg
        assert cfg.store_file == "kb.yml"


# =========================================================================
# logger.py / net.py
# =========================================================================


class TestLogger:
    def test_json_formatter_includes_context(self) -> None:
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "无法安装 %s", ("ui",), None)
        record.component = "ui"
        record.stage = "fetch"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "无法安装 ui"
        assert entry["component"] == "ui" and entry["stage"] == "fetch"

    def test_json_formatter_without_context(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "ok", (), None)
        entry = json.loads(JSONFormatter().format(record))
        assert "component" not in entry

    def test_setup_logging_idempotent(self) -> None:
        setup_logging("DEBUG")
        setup_logging("INFO", json_output=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)


class TestNet:
    def test_repository_address(self) -> None:
        prefixes = ["https://github.com/"]
        assert is_repository_address("https://github.com/org/lib", prefixes)
        assert not is_repository_address("https://gitlab.com/org/lib", prefixes)
        assert not is_repository_address("https://github.com/org/lib", [""])

    def test_dir_name(self) -> None:
        assert repository_dir_name("https://github.com/org/lib.git") == "lib"
