# lead_scout/store.py
"""
JSON-file persistence for leads and the processed-URL ledger.

Both stores share one LeadDatabase file of the shape
``{"leads": [...], "processed": [...]}``. Every mutation happens under a single
lock and is flushed to disk (temp file + rename) before the lock is released, so
check-and-mark is atomic for concurrent callers and survives restarts.
"""
import json
import logging
import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Set

from .models import Lead, LeadCandidate

logger = logging.getLogger('LeadScout.Store')


class StoreError(Exception):
    """Raised when the lead database cannot be read or written."""


class LeadDatabase:
    def __init__(self, path: str):
        self.path = path
        self.lock = threading.RLock()
        self.leads: List[Lead] = []
        self.processed: List[str] = []
        self.processed_set: Set[str] = set()
        self._load()

    def _load(self) -> None:
        if not os.path.exists(self.path):
            logger.info(f"No database at {self.path}; starting empty.")
            self.flush()
            return
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            self.leads = [Lead.from_dict(d) for d in data.get('leads', [])]
            self.processed = [str(u) for u in data.get('processed', [])]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Could not read lead database {self.path}: {e}") from e
        self.processed_set = set(self.processed)
        logger.info(f"Loaded {len(self.leads)} leads and {len(self.processed_set)} processed URLs from {self.path}")

    def _snapshot(self) -> Dict[str, Any]:
        return {
            'leads': [lead.to_dict() for lead in self.leads],
            'processed': list(self.processed),
        }

    def flush(self) -> None:
        """Atomically rewrite the database file. Caller holds the lock for mutations."""
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.leads-', suffix='.json', dir=directory)
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(self._snapshot(), f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Could not write lead database {self.path}: {e}") from e


class DedupeStore:
    """Ledger of source URLs that have already been evaluated."""

    def __init__(self, db: LeadDatabase):
        self.db = db

    def check_and_mark(self, url: str) -> bool:
        """Return True if this is the first time ``url`` is seen, marking it processed."""
        with self.db.lock:
            if url in self.db.processed_set:
                return False
            self.db.processed_set.add(url)
            self.db.processed.append(url)
            try:
                self.db.flush()
            except StoreError:
                self.db.processed_set.discard(url)
                self.db.processed.pop()
                raise
            return True

    def release(self, url: str) -> None:
        """Forget ``url`` so a later cycle evaluates it again."""
        with self.db.lock:
            if url not in self.db.processed_set:
                return
            self.db.processed_set.discard(url)
            self.db.processed.remove(url)
            self.db.flush()

    def is_processed(self, url: str) -> bool:
        with self.db.lock:
            return url in self.db.processed_set

    def __len__(self) -> int:
        with self.db.lock:
            return len(self.db.processed_set)


class LeadStore:
    """Append-only lead records. Identity and timestamp are assigned here."""

    def __init__(self, db: LeadDatabase):
        self.db = db

    def save(self, candidate: LeadCandidate) -> Lead:
        lead = Lead(
            id=uuid.uuid4().hex,
            source=candidate.source,
            text=candidate.text,
            source_url=candidate.source_url,
            created_at=datetime.now(timezone.utc),
            phones=list(candidate.phones),
            emails=list(candidate.emails),
            notified=False,
        )
        with self.db.lock:
            self.db.leads.append(lead)
            try:
                self.db.flush()
            except StoreError:
                self.db.leads.pop()
                raise
        # Hand back a copy so callers cannot change the stored record
        return Lead.from_dict(lead.to_dict())

    def all(self) -> List[Lead]:
        with self.db.lock:
            return [Lead.from_dict(lead.to_dict()) for lead in self.db.leads]

    def __len__(self) -> int:
        with self.db.lock:
            return len(self.db.leads)
