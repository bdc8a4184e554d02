from __future__ import annotations

from pathlib import Path


def test_required_package_paths_exist() -> None:
    root = Path(__file__).resolve().parents[1]
    required = [
        "src/dir_compare/cli.py",
        "src/dir_compare/engine.py",
        "src/dir_compare/scan/__init__.py",
        "src/dir_compare/compare/__init__.py",
        "src/dir_compare/logging/__init__.py",
    ]
    for rel in required:
        assert (root / rel).exists(), rel
