import logging
import uuid
from typing import List

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from database import db
from models import Service, ServiceCreate
from storage.reload import mutate_then_reload

logger = logging.getLogger(__name__)


def get_services() -> List[Service]:
    try:
        rows = list(db.services.find({}, {"_id": 0}).sort("name", ASCENDING))
    except PyMongoError as e:
        logger.error("Error fetching services: %s", e)
        return []
    return [
        Service(id=row["id"], name=row["name"], price=float(row.get("price") or 0), description=row.get("description"))
        for row in rows
    ]

def add_service(service: ServiceCreate) -> List[Service]:
    row = {"id": str(uuid.uuid4()), "name": service.name, "price": service.price, "description": service.description}
    try:
        return mutate_then_reload(lambda: db.services.insert_one(row), get_services)
    except PyMongoError as e:
        logger.error("Error adding service: %s", e)
        return []
