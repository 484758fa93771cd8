import json
from pathlib import Path
from loanfinder.lenders import LenderRecord, LenderType, eligible_lenders, lenders_frame, load_lenders

FIXTURE = Path(__file__).resolve().parent.parent / "data" / "lenders.json"

def _lender(name, min_score, type_="bank"):
    return LenderRecord.from_dict({
        "name": name, "type": type_, "rateFrom": "9.95%", "rateTo": "19.95%",
        "range": "$1,000 - $50,000", "url": f"https://example.co.nz/{name}",
        "minScoreNeeded": min_score,
    })

def test_fixture_loads():
    lenders = load_lenders(FIXTURE)
    assert len(lenders) >= 5
    assert all(isinstance(l.type, LenderType) for l in lenders)
    assert all(0 <= l.min_score_needed <= 100 for l in lenders)

def test_missing_fixture_gives_empty_list(tmp_path, caplog):
    assert load_lenders(tmp_path / "nope.json") == []
    assert "Could not load lender fixture" in caplog.text

def test_bad_json_gives_empty_list(tmp_path):
    p = tmp_path / "lenders.json"
    p.write_text("[{", encoding="utf-8")
    assert load_lenders(p) == []
    p.write_text(json.dumps({"name": "ANZ"}), encoding="utf-8")
    assert load_lenders(p) == []

def test_malformed_record_skipped(tmp_path):
    p = tmp_path / "lenders.json"
    good = {"name": "A", "type": "fintech", "rateFrom": "1%", "rateTo": "2%", "range": "$1",
            "url": "https://a", "minScoreNeeded": 50}
    p.write_text(json.dumps([good, {"name": "B", "type": "pawnshop"}, {"name": "C"}]), encoding="utf-8")
    lenders = load_lenders(p)
    assert [l.name for l in lenders] == ["A"]
    assert lenders[0].type is LenderType.FINTECH

def test_eligible_filter_and_order():
    lenders = [_lender("a", 40), _lender("b", 80), _lender("c", 60), _lender("d", 60), _lender("e", 90)]
    out = eligible_lenders(lenders, 80)
    assert [l.name for l in out] == ["b", "c", "d", "a"]

def test_score_equal_to_minimum_qualifies():
    assert [l.name for l in eligible_lenders([_lender("x", 75)], 75)] == ["x"]
    assert eligible_lenders([_lender("x", 75)], 74) == []

def test_no_score_shows_everyone_in_fixture_order():
    lenders = [_lender("a", 40), _lender("b", 80)]
    assert eligible_lenders(lenders, None) == lenders

def test_frame():
    df = lenders_frame([_lender("a", 40, "broker")])
    assert list(df.columns) == ["Lender", "Type", "Interest rate", "Loan range", "Min score", "Approval", "Apply"]
    assert df.iloc[0]["Type"] == "broker"
    assert df.iloc[0]["Interest rate"] == "9.95% - 19.95%"
    assert lenders_frame([]).empty
