from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1] / "src" / "pinsync"


def _collect_python_files(directory: Path) -> list[Path]:
    return sorted(path for path in directory.rglob("*.py") if path.is_file())


def _find_forbidden_imports(files: list[Path], forbidden_prefixes: tuple[str, ...]) -> list[str]:
    violations: list[str] = []
    for path in files:
        module = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(module):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name.startswith(forbidden_prefixes):
                        violations.append(f"{path}: import {alias.name}")
            elif isinstance(node, ast.ImportFrom):
                if node.module is None:
                    continue
                if node.module.startswith(forbidden_prefixes):
                    violations.append(f"{path}: from {node.module} import ...")
    return violations


def test_contracts_do_not_import_other_layers() -> None:
    files = _collect_python_files(ROOT / "contracts")
    forbidden = (
        "pinsync.auth",
        "pinsync.cache",
        "pinsync.cli",
        "pinsync.engine",
        "pinsync.remote",
        "pinsync.sdk",
        "pinsync.store",
    )
    violations = _find_forbidden_imports(files, forbidden)
    assert not violations, f"contracts import forbidden layers: {violations}"


def test_store_does_not_import_engine_remote_or_cli() -> None:
    files = _collect_python_files(ROOT / "store")
    violations = _find_forbidden_imports(files, ("pinsync.engine", "pinsync.remote", "pinsync.cli", "pinsync.sdk"))
    assert not violations, f"store imports forbidden layers: {violations}"


def test_engine_depends_on_remote_contract_not_github_adapter() -> None:
    files = _collect_python_files(ROOT / "engine")
    violations = _find_forbidden_imports(files, ("pinsync.remote", "pinsync.cli", "pinsync.sdk", "httpx"))
    assert not violations, f"engine imports forbidden modules: {violations}"


def test_sdk_does_not_import_cli_layer() -> None:
    violations = _find_forbidden_imports([ROOT / "sdk.py"], ("pinsync.cli", "questionary", "rich"))
    assert not violations, f"sdk imports forbidden cli layer modules: {violations}"


def test_only_cli_imports_terminal_libraries() -> None:
    files = [path for path in _collect_python_files(ROOT) if "cli" not in path.relative_to(ROOT).parts]
    violations = _find_forbidden_imports(files, ("rich", "questionary"))
    assert not violations, f"non-cli modules import terminal libraries: {violations}"
