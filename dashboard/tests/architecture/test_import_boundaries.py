from __future__ import annotations

import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]
PACKAGE = ROOT / "dashboard"


def _iter_python_files(base: Path) -> list[Path]:
    return sorted(
        file
        for file in base.rglob("*.py")
        if "__pycache__" not in file.parts and ".venv" not in file.parts
    )


def _imports_for(file_path: Path) -> list[tuple[str, int]]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    imports: list[tuple[str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append((alias.name, node.lineno))
        elif isinstance(node, ast.ImportFrom):
            module = node.module or ""
            if node.level > 0:
                module = f"{'.' * node.level}{module}"
            imports.append((module, node.lineno))
    return imports


def test_gateway_does_not_import_widgets_or_web_layer() -> None:
    forbidden_prefixes = ("dashboard.features.widgets", "dashboard.api", "dashboard.main", "fastapi")
    violations: list[str] = []
    for file_path in _iter_python_files(PACKAGE / "features" / "gateway"):
        for module, lineno in _imports_for(file_path):
            if any(module == prefix or module.startswith(f"{prefix}.") for prefix in forbidden_prefixes):
                violations.append(f"{file_path}:{lineno} imports '{module}'")
    assert not violations, "Gateway modules cannot import the view layer:\n" + "\n".join(violations)


def test_widget_service_does_not_import_api_modules() -> None:
    violations: list[str] = []
    for file_path in _iter_python_files(PACKAGE / "features"):
        if file_path.name not in {"service.py", "error_panel.py"}:
            continue
        for module, lineno in _imports_for(file_path):
            if module.startswith("dashboard.") and "api" in module.split("dashboard.", 1)[1].split("."):
                violations.append(f"{file_path}:{lineno} imports '{module}'")
            if module.startswith(".api"):
                violations.append(f"{file_path}:{lineno} imports '{module}'")
    assert not violations, "Service modules cannot import API modules:\n" + "\n".join(violations)


def test_only_gateway_clients_build_http_clients() -> None:
    violations: list[str] = []
    for file_path in _iter_python_files(PACKAGE):
        if "tests" in file_path.parts or file_path.parent.name == "gateway":
            continue
        for module, lineno in _imports_for(file_path):
            if module == "httpx" or module.startswith("httpx."):
                violations.append(f"{file_path}:{lineno} imports '{module}'")
    assert not violations, "Only the gateway may talk to backends:\n" + "\n".join(violations)
