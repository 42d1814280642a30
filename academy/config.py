from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .sync.remote import MongoRemoteStore, OfflineRemoteStore, RemoteStore

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    database_url: str = ""
    database_name: str = "parkour"
    snapshot_path: Path = Path("outputs/state.json")
    write_queue: int = 256
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("ACADEMY_DATABASE_URL", ""),
            database_name=os.getenv("ACADEMY_DATABASE_NAME", "parkour"),
            snapshot_path=Path(os.getenv("ACADEMY_SNAPSHOT_PATH", "outputs/state.json")),
            write_queue=int(os.getenv("ACADEMY_WRITE_QUEUE", "256")),
            log_level=os.getenv("ACADEMY_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def offline(self) -> bool:
        return not self.database_url

    def remote_store(self) -> RemoteStore:
        if self.offline:
            logger.warning("ACADEMY_DATABASE_URL not set. Running in offline/local snapshot mode.")
            return OfflineRemoteStore()
        return MongoRemoteStore.connect(self.database_url, self.database_name)
