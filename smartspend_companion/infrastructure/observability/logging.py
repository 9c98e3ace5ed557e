"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from smartspend_companion.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_decision(
    request_id: str,
    user_id: str,
    recommendation: str,
    confidence: float,
    decisive_factor: str,
    duration_ms: float,
) -> None:
    """Log structured decision outcome for analysis"""
    logging.info(
        "Decision completed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "decision_complete",
            "recommendation": recommendation,
            "confidence": confidence,
            "decisive_factor": decisive_factor,
            "duration_ms": duration_ms,
        },
    )


def log_reaction(event_type: str, pose: str, kind: str, duration_ms: int) -> None:
    """Log each reaction as it goes on screen"""
    logging.getLogger("smartspend_companion.companion").info(
        "Reaction emitted",
        extra={
            "step": "reaction_emitted",
            "event_type": event_type,
            "pose": pose,
            "kind": kind,
            "duration_ms": duration_ms,
        },
    )
