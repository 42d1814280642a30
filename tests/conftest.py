from __future__ import annotations

from pathlib import Path

import pytest

from academy.store.bootstrap import build_store
from academy.store.dashboard import DashboardStore
from academy.sync.remote import OfflineRemoteStore

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def root() -> Path:
    return ROOT


@pytest.fixture
def store() -> DashboardStore:
    return build_store(ROOT, remote=OfflineRemoteStore(), threaded=False, use_snapshot=False)
