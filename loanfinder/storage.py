from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, MutableMapping, Optional, Protocol
import json
import logging
import uuid

import duckdb

from loanfinder.scoring import BorrowerProfile

logger = logging.getLogger(__name__)

STORAGE_KEY = "loanEligibility"
SESSION_ID_KEY = "loanfinder_session_id"
DB_PATH = Path("db/loanfinder.duckdb")


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def clear(self, key: str) -> None: ...


class SessionStore:
    """Store backed by a mutable mapping (st.session_state in the app)."""

    def __init__(self, mapping: Optional[MutableMapping[str, Any]] = None):
        self.mapping = mapping if mapping is not None else {}

    def get(self, key: str) -> Optional[str]:
        return self.mapping.get(key)

    def set(self, key: str, value: str) -> None:
        self.mapping[key] = value

    def clear(self, key: str) -> None:
        if key in self.mapping:
            del self.mapping[key]


def duckdb_conn(path: Path = DB_PATH):
    return duckdb.connect(Path(path).as_posix(), read_only=False)


class DuckDBStore:
    """Store backed by a kv_store table in a DuckDB file, one namespace per session."""

    def __init__(self, path: Path = DB_PATH, session_id: Optional[str] = None):
        self.path = Path(path)
        self.session_id = session_id or uuid.uuid4().hex
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with duckdb_conn(self.path) as con:
            con.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                  session_id TEXT,
                  key TEXT,
                  value TEXT,
                  PRIMARY KEY (session_id, key)
                );
            """)

    def get(self, key: str) -> Optional[str]:
        with duckdb_conn(self.path) as con:
            row = con.execute(
                "SELECT value FROM kv_store WHERE session_id = ? AND key = ?", [self.session_id, key]
            ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with duckdb_conn(self.path) as con:
            con.execute("INSERT OR REPLACE INTO kv_store VALUES (?, ?, ?)", [self.session_id, key, value])

    def clear(self, key: str) -> None:
        with duckdb_conn(self.path) as con:
            con.execute("DELETE FROM kv_store WHERE session_id = ? AND key = ?", [self.session_id, key])

    def purge(self) -> int:
        """Delete every session's rows. Returns how many were removed."""
        with duckdb_conn(self.path) as con:
            n = con.execute("SELECT COUNT(*) FROM kv_store").fetchone()[0]
            con.execute("DELETE FROM kv_store")
        return n


@dataclass
class SavedProfile:
    age: float
    income: float
    debts: float
    credit: str
    residency: str
    score: int

    def to_profile(self) -> BorrowerProfile:
        return BorrowerProfile.from_raw(self.age, self.income, self.debts, self.credit, self.residency)


def store_loan_data(store: KeyValueStore, profile: BorrowerProfile, score: int) -> SavedProfile:
    saved = SavedProfile(
        age=profile.age,
        income=profile.income,
        debts=profile.monthly_debt,
        credit=profile.credit_rating.value,
        residency=profile.residency_status.value,
        score=int(score),
    )
    store.set(STORAGE_KEY, json.dumps(asdict(saved)))
    return saved

def get_loan_data(store: KeyValueStore) -> Optional[SavedProfile]:
    raw = store.get(STORAGE_KEY)
    if raw is None:
        return None
    try:
        data = json.loads(raw)
        return SavedProfile(
            age=data["age"],
            income=data["income"],
            debts=data["debts"],
            credit=data["credit"],
            residency=data["residency"],
            score=int(data["score"]),
        )
    except (ValueError, TypeError, KeyError, OverflowError) as e:
        logger.warning("Discarding unreadable saved result", extra={"key": STORAGE_KEY, "error": str(e)})
        return None

def clear_loan_data(store: KeyValueStore) -> None:
    store.clear(STORAGE_KEY)


def open_store(settings, session: Optional[MutableMapping[str, Any]] = None) -> KeyValueStore:
    """Pick the configured backend. DuckDB rows are keyed by an id kept in the session."""
    if settings.storage_backend == "duckdb":
        session_id = None
        if session is not None:
            if SESSION_ID_KEY not in session:
                session[SESSION_ID_KEY] = uuid.uuid4().hex
            session_id = session[SESSION_ID_KEY]
        return DuckDBStore(settings.duckdb_path, session_id=session_id)
    return SessionStore(session)
