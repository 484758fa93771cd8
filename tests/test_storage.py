import json
from loanfinder.config import Settings
from loanfinder.scoring import BorrowerProfile
from loanfinder.storage import (
    SESSION_ID_KEY,
    STORAGE_KEY,
    DuckDBStore,
    SessionStore,
    clear_loan_data,
    get_loan_data,
    open_store,
    store_loan_data,
)

def _profile():
    return BorrowerProfile.from_raw(35, 65000, 800, "Good", "Citizen")

def test_session_store_round_trip():
    backing = {}
    store = SessionStore(backing)
    store_loan_data(store, _profile(), 90)

    saved = get_loan_data(store)
    assert saved.score == 90
    assert saved.credit == "Good"
    assert saved.residency == "Citizen"
    assert json.loads(backing[STORAGE_KEY])["debts"] == 800

def test_overwrite_and_clear():
    store = SessionStore()
    store_loan_data(store, _profile(), 90)
    store_loan_data(store, BorrowerProfile.from_raw(22, 30000, 1200, "Poor", "Work Visa"), 37)
    assert get_loan_data(store).score == 37

    clear_loan_data(store)
    assert get_loan_data(store) is None
    clear_loan_data(store)  # clearing twice is fine

def test_nothing_saved():
    assert get_loan_data(SessionStore()) is None

def test_corrupt_data_is_ignored(caplog):
    store = SessionStore({STORAGE_KEY: "{not json"})
    assert get_loan_data(store) is None
    store.set(STORAGE_KEY, json.dumps({"age": 30}))
    assert get_loan_data(store) is None
    assert "unreadable" in caplog.text

def test_saved_profile_rescored_back():
    store = SessionStore()
    store_loan_data(store, _profile(), 90)
    assert get_loan_data(store).to_profile() == _profile()

def test_duckdb_store(tmp_path):
    path = tmp_path / "kv.duckdb"
    store = DuckDBStore(path, session_id="s1")
    assert get_loan_data(store) is None

    store_loan_data(store, _profile(), 90)
    store_loan_data(store, _profile(), 88)
    # a fresh handle sees the same file
    assert get_loan_data(DuckDBStore(path, session_id="s1")).score == 88

    clear_loan_data(store)
    assert store.get(STORAGE_KEY) is None

def test_open_store_picks_backend(tmp_path):
    session = {}
    store = open_store(Settings(), session)
    assert isinstance(store, SessionStore)
    assert store.mapping is session

    store = open_store(Settings(storage_backend="duckdb", duckdb_path=tmp_path / "x.duckdb"))
    assert isinstance(store, DuckDBStore)

def test_profile_with_string_fields_can_be_stored():
    store = SessionStore()
    store_loan_data(store, BorrowerProfile(30, 80000, 0, credit_rating="Excellent", residency_status="Citizen"), 100)
    saved = get_loan_data(store)
    assert saved.credit == "Excellent"
    assert saved.residency == "Citizen"

def test_overflowing_number_is_ignored(caplog):
    raw = '{"age": 1, "income": 1, "debts": 0, "credit": "Good", "residency": "Citizen", "score": 1e999}'
    assert get_loan_data(SessionStore({STORAGE_KEY: raw})) is None
    assert "unreadable" in caplog.text

def test_duckdb_sessions_are_isolated(tmp_path):
    path = tmp_path / "kv.duckdb"
    alice = DuckDBStore(path, session_id="a")
    bob = DuckDBStore(path, session_id="b")
    store_loan_data(alice, _profile(), 90)
    assert get_loan_data(bob) is None

    store_loan_data(bob, BorrowerProfile.from_raw(22, 30000, 1200, "Poor", "Work Visa"), 37)
    assert get_loan_data(alice).score == 90
    clear_loan_data(bob)
    assert get_loan_data(alice).score == 90

    assert alice.purge() == 1
    assert get_loan_data(alice) is None

def test_open_store_keeps_one_id_per_session(tmp_path):
    settings = Settings(storage_backend="duckdb", duckdb_path=tmp_path / "x.duckdb")
    first, second = {}, {}
    store_loan_data(open_store(settings, first), _profile(), 90)
    assert get_loan_data(open_store(settings, first)).score == 90
    assert get_loan_data(open_store(settings, second)) is None
    assert first[SESSION_ID_KEY] != second[SESSION_ID_KEY]
