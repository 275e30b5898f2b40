from fastapi import APIRouter, Depends
from models import CompletedServiceCreate, ServiceCreate
from auth import get_current_user
from storage.completed_services import add_completed_service, get_completed_services
from storage.services import add_service, get_services

router = APIRouter(tags=["Services"])

@router.get("/services")
def list_services(user=Depends(get_current_user)):
    return {"services": get_services()}

@router.post("/services")
def create_service(service: ServiceCreate, user=Depends(get_current_user)):
    return {"services": add_service(service)}

@router.get("/completed_services")
def list_completed_services(user=Depends(get_current_user)):
    return {"completed_services": get_completed_services()}

# Returns the reloaded list, or [] when the insert failed
@router.post("/completed_services")
def create_completed_service(record: CompletedServiceCreate, user=Depends(get_current_user)):
    return {"completed_services": add_completed_service(record, created_by=user["id"])}
