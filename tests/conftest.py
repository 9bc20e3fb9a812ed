"""Shared pytest fixtures for the polymd test suite.

Provides reusable fixtures for:
- Isolated environments (no real ``USER`` / ``POLYMD_*`` leaking in)
- A small throwaway template tree
- Requests and generators rooted in ``tmp_path``
"""

from __future__ import annotations

from pathlib import Path

import pytest

from polymd.config import ScaffoldRequest
from polymd.scaffolder import ComponentGenerator


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture
def empty_environ() -> dict[str, str]:
    """An environment with none of the variables polymd reads."""
    return {}


@pytest.fixture
def full_environ() -> dict[str, str]:
    """An environment with every variable polymd reads."""
    return {
        "POLYMD_AUTHOR": "Env Author",
        "USER": "sysuser",
        "POLYMD_REPO": "env-org/",
    }


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """A small source tree::

        src/
          a.txt
          b.txt
          skip.me
          nested/
            c.txt
            skip.me
    """
    src = tmp_path / "src"
    (src / "nested").mkdir(parents=True)
    (src / "a.txt").write_text("alpha", encoding="utf-8")
    (src / "b.txt").write_text("beta", encoding="utf-8")
    (src / "skip.me").write_text("top-level", encoding="utf-8")
    (src / "nested" / "c.txt").write_text("gamma", encoding="utf-8")
    (src / "nested" / "skip.me").write_text("nested", encoding="utf-8")
    return src


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


@pytest.fixture
def make_generator(tmp_path: Path, empty_environ):
    """Factory building a ``ComponentGenerator`` that writes under ``tmp_path``."""

    def _make(name: str = "my-el", environ=None, **fields) -> ComponentGenerator:
        request = ScaffoldRequest(name=name, **fields)
        return ComponentGenerator(
            request,
            environ=empty_environ if environ is None else environ,
            cwd=tmp_path,
        )

    return _make
