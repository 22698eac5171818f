from __future__ import annotations

import sys

import pytest


@pytest.fixture(autouse=True, scope="module")
def _restore_caltrack_modules():
    """Undo per-module purges of ``caltrack`` from ``sys.modules``.

    Some test modules drop and re-import ``caltrack`` to pick up environment
    settings; restoring the originals keeps ``mock.patch`` targets in later
    modules pointing at the same module objects those modules imported.
    """
    saved = {n: m for n, m in sys.modules.items() if n == "caltrack" or n.startswith("caltrack.")}
    yield
    for name in [n for n in sys.modules if n == "caltrack" or n.startswith("caltrack.")]:
        del sys.modules[name]
    sys.modules.update(saved)
