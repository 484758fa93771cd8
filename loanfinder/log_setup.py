"""Structured JSON logging for the app and scripts"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from loanfinder.scoring import EligibilityResult


class SiteJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "loanfinder"


def setup_logging(level: str = "INFO") -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(SiteJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_calculation(result: EligibilityResult) -> None:
    """Log the outcome of one calculation. Raw borrower figures are left out."""
    logging.getLogger("loanfinder.calculator").info(
        "Eligibility calculated",
        extra={
            "step": "calculate",
            "score": result.score,
            "tier": result.tier.value,
            "improvement_count": len(result.improvements),
        },
    )
