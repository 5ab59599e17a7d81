"""
Per-user exclusion sets persisted on disk.

Each user gets one JSON list of ids they asked to hide, e.g.
`deletedJobs_<userId>.json`. The list is read before the active list is
shown and rewritten on every optimistic delete, rollback or restore.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Set
from urllib.parse import quote

from app.core.config import CLIENT_STATE_DIR

logger = logging.getLogger(__name__)

JOBS_NAMESPACE = "deletedJobs"
COMPANIES_NAMESPACE = "deletedCompanies"


class ExclusionStore:
    def __init__(self, state_dir: Optional[str] = None, namespace: str = JOBS_NAMESPACE):
        self.state_dir = Path(state_dir or CLIENT_STATE_DIR)
        self.namespace = namespace

    def path_for(self, user_id: str) -> Path:
        # Percent-encoding is reversible, so distinct users never share a file
        return self.state_dir / f"{self.namespace}_{quote(user_id, safe='')}.json"

    def load(self, user_id: str) -> Set[str]:
        path = self.path_for(user_id)
        if not path.exists():
            return set()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable exclusion set {path}, starting empty: {e}")
            return set()
        if not isinstance(data, list):
            logger.warning(f"Exclusion set {path} is not a list, starting empty")
            return set()
        return {str(item) for item in data}

    def save(self, user_id: str, ids: Set[str]) -> None:
        path = self.path_for(user_id)
        if not ids:
            path.unlink(missing_ok=True)
            return

        self.state_dir.mkdir(parents=True, exist_ok=True)
        # Write then rename so a crash never leaves a half-written file
        fd, tmp_path = tempfile.mkstemp(dir=self.state_dir, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(sorted(ids), f)
            os.replace(tmp_path, path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def add(self, user_id: str, entity_id: str) -> Set[str]:
        ids = self.load(user_id)
        ids.add(entity_id)
        self.save(user_id, ids)
        return ids

    def discard(self, user_id: str, entity_id: str) -> Set[str]:
        ids = self.load(user_id)
        ids.discard(entity_id)
        self.save(user_id, ids)
        return ids

    def contains(self, user_id: str, entity_id: str) -> bool:
        return entity_id in self.load(user_id)
