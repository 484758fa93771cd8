import logging
from pathlib import Path
import pytest
from loanfinder.config import ConfigError, Settings, load_settings
from loanfinder.log_setup import SiteJsonFormatter, log_calculation, setup_logging
from loanfinder.scoring import calculate_eligibility

def test_missing_file_gives_defaults(tmp_path):
    s = load_settings(tmp_path / "missing.yaml")
    assert s == Settings()
    assert s.lenders_path == Path("data/lenders.json")

def test_yaml_overrides(tmp_path):
    p = tmp_path / "site.yaml"
    p.write_text("storage_backend: duckdb\nduckdb_path: /tmp/x.duckdb\nlog_level: DEBUG\nunknown_key: 1\n", encoding="utf-8")
    s = load_settings(p)
    assert s.storage_backend == "duckdb"
    assert s.duckdb_path == Path("/tmp/x.duckdb")
    assert s.log_level == "DEBUG"

def test_env_var_points_at_config(tmp_path, monkeypatch):
    p = tmp_path / "other.yaml"
    p.write_text("site_name: Test Site\n", encoding="utf-8")
    monkeypatch.setenv("LOANFINDER_CONFIG", str(p))
    assert load_settings().site_name == "Test Site"

def test_unknown_backend_rejected(tmp_path):
    p = tmp_path / "site.yaml"
    p.write_text("storage_backend: redis\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(p)

def test_invalid_yaml_names_the_file(tmp_path):
    p = tmp_path / "site.yaml"
    p.write_text("storage_backend: [session\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="site.yaml"):
        load_settings(p)

def test_repo_config_loads():
    s = load_settings(Path(__file__).resolve().parent.parent / "config" / "site.yaml")
    assert s.storage_backend == "session"
    assert "not a credit decision" in s.disclaimer

def test_log_calculation(caplog):
    caplog.set_level(logging.INFO)
    log_calculation(calculate_eligibility(30, 90000, 0, "Excellent", "Citizen"))
    rec = caplog.records[-1]
    assert rec.message == "Eligibility calculated"
    assert rec.score == 100
    assert rec.tier == "High"

def test_setup_logging_installs_json_handler():
    root = logging.getLogger()
    old_handlers, old_level = root.handlers[:], root.level
    try:
        setup_logging("WARNING")
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, SiteJsonFormatter)
    finally:
        root.handlers[:] = old_handlers
        root.setLevel(old_level)
