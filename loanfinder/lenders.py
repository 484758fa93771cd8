from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging

import pandas as pd

logger = logging.getLogger(__name__)

LENDERS_PATH = Path("data/lenders.json")


class LenderType(str, Enum):
    BANK = "bank"
    FINTECH = "fintech"
    NON_BANK = "non-bank"
    BROKER = "broker"


@dataclass(frozen=True)
class LenderRecord:
    name: str
    type: LenderType
    rate_from: str
    rate_to: str
    loan_range: str
    approval: str
    url: str
    eligibility_notes: str
    min_score_needed: int
    logo: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LenderRecord":
        # Fixture keys follow the camelCase of lenders.json.
        return cls(
            name=str(d["name"]),
            type=LenderType(d["type"]),
            rate_from=str(d["rateFrom"]),
            rate_to=str(d["rateTo"]),
            loan_range=str(d["range"]),
            approval=str(d.get("approval", "")),
            url=str(d["url"]),
            eligibility_notes=str(d.get("eligibilityNotes", "")),
            min_score_needed=int(d["minScoreNeeded"]),
            logo=d.get("logo"),
        )


def load_lenders(path: Path = LENDERS_PATH) -> List[LenderRecord]:
    """Read the lender fixture. Any load failure gives an empty list."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error("Could not load lender fixture", extra={"path": path.as_posix(), "error": str(e)})
        return []
    if not isinstance(data, list):
        logger.error("Lender fixture is not a JSON array", extra={"path": path.as_posix()})
        return []

    lenders = []
    for i, item in enumerate(data):
        try:
            lenders.append(LenderRecord.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed lender record", extra={"index": i, "error": str(e)})
    return lenders

def eligible_lenders(lenders: List[LenderRecord], score: Optional[int]) -> List[LenderRecord]:
    """Lenders whose minimum score is met, strictest first. No score yet: everyone, fixture order."""
    if score is None:
        return list(lenders)
    eligible = [l for l in lenders if score >= l.min_score_needed]
    return sorted(eligible, key=lambda l: l.min_score_needed, reverse=True)

def lenders_frame(lenders: List[LenderRecord]) -> pd.DataFrame:
    rows = [
        {
            "Lender": l.name,
            "Type": l.type.value,
            "Interest rate": f"{l.rate_from} - {l.rate_to}",
            "Loan range": l.loan_range,
            "Min score": l.min_score_needed,
            "Approval": l.approval,
            "Apply": l.url,
        }
        for l in lenders
    ]
    return pd.DataFrame(rows, columns=["Lender", "Type", "Interest rate", "Loan range", "Min score", "Approval", "Apply"])
