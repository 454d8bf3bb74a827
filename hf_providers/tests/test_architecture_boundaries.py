"""Architecture boundary guardrails for the provider-agnostic base layer.

``hf_providers/base`` and ``hf_providers/config`` must not import any
backend adapter; adapters depend inward only.
"""
from __future__ import annotations

import re
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
INNER_DIRS = (PACKAGE_ROOT / "base", PACKAGE_ROOT / "config")
_FORBIDDEN = re.compile(r"^\s*(?:from|import)\s+(?:hf_providers\.huggingface|\.\.?huggingface)\b", re.MULTILINE)


def _iter_py_files(root: Path) -> list[Path]:
    return [p for p in root.rglob("*.py") if "__pycache__" not in p.parts]


def test_inner_layers_do_not_import_adapters() -> None:
    offenders = []
    for root in INNER_DIRS:
        for path in _iter_py_files(root):
            text = path.read_text(encoding="utf-8", errors="replace")
            if _FORBIDDEN.search(text):
                offenders.append(str(path.relative_to(PACKAGE_ROOT)))
    assert not offenders, f"adapter imports found in inner layers: {offenders}"  # nosec B101
