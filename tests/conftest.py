"""Pytest configuration and shared fixtures.

Tests import ``church_ledger`` straight from the workspace ``packages/``
directory, so no install step is needed. Process-level configuration that the
CLI reads from the environment is cleared per test to keep runs hermetic.
"""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `church_ledger` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR)] if p not in sys.path]


def dedent(s: str) -> str:
    # Keep internal newlines, but normalize indentation for readability.
    return textwrap.dedent(s).lstrip("\n").rstrip() + "\n"


SCENARIO_A_CSV = dedent(
    """
    Data,Descrição,Valor
    01/03/2024,Dízimo,150.00
    02/03/2024,Conta de Luz,-80.50
    03/03/2024,,
    """
)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run each test from an empty directory with no log-level override."""

    monkeypatch.delenv("CHURCH_LEDGER_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def scenario_a_csv(tmp_path: Path) -> Path:
    path = tmp_path / "extrato.csv"
    path.write_text(SCENARIO_A_CSV, encoding="utf-8")
    return path
