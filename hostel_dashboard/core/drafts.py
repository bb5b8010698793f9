"""
Process-local store for unsaved page state

Attendance drafts are too large for the cookie session, so the session
only carries a draft id and the draft itself lives here. Entries expire
after `max_age` seconds and the store never holds more than
`max_entries`; the least recently written drafts go first.
"""
import threading
import time
import uuid
from collections import OrderedDict


class DraftStore:
    """Thread-safe, bounded dict of drafts keyed by (draft id, name)"""

    def __init__(self, max_entries=500, max_age=8 * 3600, clock=time.monotonic):
        self.max_entries = max_entries
        self.max_age = max_age
        self._clock = clock
        self._drafts = OrderedDict()  # key -> (written_at, state)
        self._lock = threading.Lock()

    @staticmethod
    def new_id():
        return uuid.uuid4().hex

    def _expire(self, now):
        # Oldest writes sit at the front
        while self._drafts:
            key, (written_at, _) = next(iter(self._drafts.items()))
            if now - written_at < self.max_age:
                break
            del self._drafts[key]

    def get(self, draft_id, name):
        with self._lock:
            self._expire(self._clock())
            entry = self._drafts.get((draft_id, name))
            return entry[1] if entry else None

    def put(self, draft_id, name, state):
        with self._lock:
            now = self._clock()
            self._expire(now)
            key = (draft_id, name)
            self._drafts.pop(key, None)
            self._drafts[key] = (now, state)
            while len(self._drafts) > self.max_entries:
                self._drafts.popitem(last=False)

    def discard(self, draft_id, name=None):
        with self._lock:
            if name is not None:
                self._drafts.pop((draft_id, name), None)
                return
            for key in [k for k in self._drafts if k[0] == draft_id]:
                del self._drafts[key]

    def clear(self):
        with self._lock:
            self._drafts.clear()

    def __len__(self):
        with self._lock:
            return len(self._drafts)
