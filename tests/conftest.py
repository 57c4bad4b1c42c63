# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Add tests/ to sys.path so test_utils is importable, and isolate the env."""

import pathlib
import sys

import pytest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent))


@pytest.fixture(autouse=True)
def _plain_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep color and debug logging off unless a test turns them on."""
    for var in ("FORCE_COLOR", "NO_COLOR", "SUBCMD_DEBUG", "SUBCMD_STATE_DIR"):
        monkeypatch.delenv(var, raising=False)
