import logging
from typing import List, Optional

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from database import db
from models import Mechanic

logger = logging.getLogger(__name__)


def _from_row(row) -> Mechanic:
    return Mechanic(
        id=row["id"],
        name=row["name"],
        specialization=row.get("specialization"),
        phone=row.get("phone"),
    )

def get_mechanics() -> List[Mechanic]:
    try:
        rows = list(db.mechanics.find({}, {"_id": 0}).sort("name", ASCENDING))
    except PyMongoError as e:
        logger.error("Error fetching mechanics: %s", e)
        return []
    return [_from_row(row) for row in rows]

def get_mechanic(mechanic_id: str) -> Optional[Mechanic]:
    row = db.mechanics.find_one({"id": mechanic_id}, {"_id": 0})
    return _from_row(row) if row else None

def save_mechanic(mechanic: Mechanic):
    row = {
        "id": mechanic.id,
        "name": mechanic.name,
        "specialization": mechanic.specialization,
        "phone": mechanic.phone,
    }
    if db.mechanics.find_one({"id": mechanic.id}):
        db.mechanics.update_one({"id": mechanic.id}, {"$set": row})
    else:
        db.mechanics.insert_one(row)
    logger.info("Saved mechanic %s", mechanic.id)
