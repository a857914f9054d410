"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from expense_insights.config import settings


class ServiceJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping each record with time, level and service name"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger"""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ServiceJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_insights(
    request_id: str,
    user_id: str,
    granularity: str,
    bucket_count: int,
    category_count: int,
    duration_ms: float,
) -> None:
    """Log a completed insights computation"""
    logging.info(
        "Insights computed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "insights_complete",
            "granularity": granularity,
            "bucket_count": bucket_count,
            "category_count": category_count,
            "duration_ms": duration_ms,
        },
    )


def log_health_score(request_id: str, user_id: str, overall: int, grade: str, duration_ms: float) -> None:
    logging.info(
        "Financial health scored",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "health_score_complete",
            "overall": overall,
            "grade": grade,
            "duration_ms": duration_ms,
        },
    )
