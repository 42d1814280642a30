from __future__ import annotations

import logging
from pathlib import Path

from ..config import Settings
from ..data.directory import InstructorDirectory, StudentDirectory
from ..data.loader import load_data
from ..data.schedule import WeeklyTemplate
from ..data.skills import SkillCatalog
from ..sync.remote import RemoteStore
from ..sync.snapshot import LocalSnapshot
from ..sync.writer import BestEffortWriter
from .dashboard import DashboardStore

logger = logging.getLogger(__name__)


def build_store(
    project_root: Path,
    settings: Settings | None = None,
    *,
    remote: RemoteStore | None = None,
    threaded: bool = True,
    use_snapshot: bool = True,
) -> DashboardStore:
    """Seed a store from ``data/``, then overlay the local snapshot if one exists."""
    settings = settings or Settings()
    loaded = load_data(project_root)
    template = WeeklyTemplate(loaded.schedule, loaded.weekly_roster)
    skills = SkillCatalog(loaded.skills)
    store = DashboardStore(
        template,
        students=StudentDirectory(loaded.students, skills).records,
        instructors=InstructorDirectory(loaded.instructors).records,
        remote=remote if remote is not None else settings.remote_store(),
        writer=BestEffortWriter(max_pending=settings.write_queue, threaded=threaded),
    )
    if use_snapshot:
        state = LocalSnapshot(project_root / settings.snapshot_path).load()
        if state:
            try:
                store.restore(state)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning("Ignoring malformed snapshot %s: %s", settings.snapshot_path, e)
            else:
                logger.info("Restored local snapshot from %s", settings.snapshot_path)
    return store


def save_snapshot(store: DashboardStore, project_root: Path, settings: Settings | None = None) -> Path:
    settings = settings or Settings()
    path = project_root / settings.snapshot_path
    LocalSnapshot(path).save(store.snapshot())
    return path
