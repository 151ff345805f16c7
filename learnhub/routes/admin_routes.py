from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from learnhub.core.database import get_db
from learnhub.core.dependencies import get_current_admin_user
from learnhub.models.user_model import User
from learnhub.models.enums import PayoutStatus, UserRole
from learnhub.schemas import user_schema as schemas
from learnhub.schemas import admin_schema, payout_schema
from learnhub.schemas.base_schema import CamelModel
from learnhub.crud import (
    user_crud as crud,
    payout_crud,
    analytics_crud,
)
from learnhub.services import notification_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["Admin Panel"])

# --- User Management by Admin ---

class PaginatedUsersAdmin(CamelModel): # Pydantic model for paginated response
    total: int
    users: List[schemas.UserDisplay]
    page: int
    size: int

@router.get("/users", response_model=PaginatedUsersAdmin)
def admin_list_users(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin_user),
    skip: int = Query(0, ge=0, alias="pageOffset"), # pageOffset maps to skip
    limit: int = Query(20, ge=1, le=200, alias="pageSize"), # pageSize maps to limit
    role: Optional[UserRole] = Query(None)
):
    """
    Admin: Get a list of users with pagination and an optional role filter.
    """
    logger.info(f"Admin {current_admin.username} listing users. Role: {role}, Skip: {skip}, Limit: {limit}")

    users_db = crud.get_users(db, role=role, skip=skip, limit=limit)
    return PaginatedUsersAdmin(
        total=crud.count_users(db, role=role),
        users=[schemas.UserDisplay.model_validate(user) for user in users_db],
        page=(skip // limit) + 1,
        size=limit,
    )

@router.get("/stats", response_model=admin_schema.PlatformStatsOverview)
def admin_platform_stats(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin_user)
):
    """
    Admin: Platform-wide counts of users, courses, enrollments and money moved.
    """
    return analytics_crud.get_platform_stats(db)

# --- Payout Management ---

@router.get("/payouts", response_model=List[payout_schema.PayoutDisplay])
def admin_list_payouts(
    status: Optional[PayoutStatus] = Query(None, description="Filter payouts by status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin_user)
):
    return payout_crud.get_payouts(db, status=status, skip=skip, limit=limit)

@router.patch("/payouts/{payout_id}/process", response_model=payout_schema.PayoutDisplay)
def admin_process_payout(
    payout_id: int,
    process_in: payout_schema.PayoutProcess,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin_user)
):
    """
    Admin: Mark a pending payout paid or failed and notify the requester.
    Marking it paid deducts the amount from the user's earnings.
    """
    logger.info(f"Admin {current_admin.username} processing payout {payout_id} as {process_in.status.value}")
    payout = payout_crud.process_payout(db, payout_id, process_in, admin_id=current_admin.id)
    notification_service.notify_payout_processed(db, payout)
    return payout
