from fastapi import APIRouter, Depends, HTTPException
from models import MechanicFields, Notification
from auth import get_current_user
from forms import FormValidationError, MechanicForm
from storage.mechanics import get_mechanic, get_mechanics, save_mechanic
from pymongo.errors import PyMongoError
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mechanics", tags=["Mechanic"])

def _failure(action: str, error: Exception) -> HTTPException:
    notification = Notification(title="Error", description=f"Could not {action}: {error}", variant="destructive")
    return HTTPException(status_code=500, detail=notification.model_dump())

def _submit(form: MechanicForm, fields: MechanicFields):
    try:
        return form.submit(fields.model_dump())
    except FormValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    except PyMongoError as e:
        logger.error("Error saving mechanic: %s", e)
        raise _failure("save the mechanic", e)

@router.get("")
def list_mechanics(user=Depends(get_current_user)):
    return {"mechanics": get_mechanics()}

@router.post("")
def create_mechanic(fields: MechanicFields, user=Depends(get_current_user)):
    form = MechanicForm(on_submit=save_mechanic)
    form.open()
    mechanic = _submit(form, fields)
    return {"message": "Mechanic registered successfully", "mechanic": mechanic, "mechanics": get_mechanics()}

@router.put("/{mechanic_id}")
def update_mechanic(mechanic_id: str, fields: MechanicFields, user=Depends(get_current_user)):
    try:
        existing = get_mechanic(mechanic_id)
    except PyMongoError as e:
        logger.error("Error loading mechanic %s: %s", mechanic_id, e)
        raise _failure("load the mechanic", e)
    if existing is None:
        raise HTTPException(status_code=404, detail="Mechanic not found")

    form = MechanicForm(on_submit=save_mechanic)
    form.open(existing)
    mechanic = _submit(form, fields)
    return {"message": "Mechanic updated successfully", "mechanic": mechanic, "mechanics": get_mechanics()}
