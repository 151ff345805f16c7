from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from learnhub.core.database import get_db
from learnhub.core.dependencies import get_current_user, get_settings
from learnhub.models.user_model import User
from learnhub.models.enums import EarningSource
from learnhub.schemas import referral_schema as schemas
from learnhub.schemas import payout_schema
from learnhub.crud import referral_crud as crud
from learnhub.crud import user_crud, payout_crud

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Referrals & Earnings"])

# --- User-Facing Referral Endpoints ---

@router.get("/referrals/me", response_model=schemas.ReferralInfo)
def get_my_referral_information(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    settings = Depends(get_settings)
):
    """
    Get the current user's referral code, a shareable sign-up link, how many
    users signed up with it, and the current earnings balance.
    """
    referral_link = f"{settings.APP_FRONTEND_URL.rstrip('/')}/register?ref={current_user.referral_code}"
    return schemas.ReferralInfo(
        referral_code=current_user.referral_code,
        referral_link=referral_link,
        referred_count=user_crud.count_referred_users(db, current_user.referral_code),
        earnings=round(current_user.earnings or 0.0, 2),
    )

@router.get("/earnings", response_model=List[schemas.EarningDisplay])
def get_my_earnings(
    source: Optional[EarningSource] = Query(None, description="Filter earnings by source"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    The current user's earnings ledger, newest first.
    """
    return crud.get_user_earnings(db, current_user.id, source=source, skip=skip, limit=limit)

# --- Payouts ---

@router.post("/payouts/request", response_model=payout_schema.PayoutDisplay, status_code=status.HTTP_201_CREATED)
def request_payout(
    payout_in: payout_schema.PayoutRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Ask for a withdrawal of earnings. The request stays pending until an admin processes it.
    """
    return payout_crud.create_payout(db, payout_in, current_user)

@router.get("/payouts", response_model=List[payout_schema.PayoutDisplay])
def get_my_payouts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return payout_crud.get_user_payouts(db, current_user.id)
