import logging
from datetime import datetime
from typing import List, Optional

from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from database import db
from models import CompletedService, CompletedServiceCreate
from storage.reload import mutate_then_reload

logger = logging.getLogger(__name__)


def _as_text(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return value

def _from_row(row) -> CompletedService:
    return CompletedService(
        id=str(row["_id"]),
        mechanicId=row.get("mechanic_id") or "",
        serviceIds=row.get("service_ids") or [],
        totalAmount=float(row.get("total_amount") or 0),
        receivedAmount=float(row.get("received_amount") or 0),
        completionDate=_as_text(row.get("completion_date")),
        createdAt=_as_text(row.get("created_at")),
    )

def _to_row(record: CompletedServiceCreate, created_by: Optional[str]) -> dict:
    return {
        "mechanic_id": record.mechanic_id,
        "service_ids": list(record.service_ids),
        "total_amount": record.total_amount,
        "received_amount": record.received_amount,
        "completion_date": record.completion_date,
        "created_at": record.created_at,
        "created_by": created_by,
    }


def get_completed_services() -> List[CompletedService]:
    """All completed services, newest first. Degrades to ``[]`` on error."""
    try:
        rows = list(db.completed_services.find().sort("created_at", DESCENDING))
        return [_from_row(row) for row in rows]
    # ValueError covers pydantic's ValidationError and unparseable amounts
    except (PyMongoError, ValueError) as e:
        logger.error("Error fetching completed services: %s", e)
        return []

def add_completed_service(record: CompletedServiceCreate, created_by: Optional[str] = None) -> List[CompletedService]:
    """Insert ``record`` on behalf of ``created_by`` and return the reloaded list."""
    try:
        return mutate_then_reload(
            lambda: db.completed_services.insert_one(_to_row(record, created_by)),
            get_completed_services,
        )
    except PyMongoError as e:
        logger.error("Error adding completed service: %s", e)
        return []
