from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import datetime, timezone
from typing import List, Optional
import logging

from learnhub.core.errors import NotFoundError, ValidationConflictError
from learnhub.models.payout_model import Payout
from learnhub.models.user_model import User
from learnhub.models.enums import PayoutStatus
from learnhub.schemas import payout_schema as schemas
from learnhub.crud import user_crud

logger = logging.getLogger(__name__)

def create_payout(db: Session, payout_in: schemas.PayoutRequest, user: User) -> Payout:
    """
    Records a pending payout request.

    The amount is checked against the balance at request time only. Nothing is
    reserved: the balance is re-checked when an admin marks the payout paid.

    Raises:
        ValidationConflictError: the amount exceeds the user's current earnings.
    """
    db.refresh(user) # Compare against the committed balance, not a stale copy
    logger.info(f"User {user.id} requesting payout of {payout_in.amount:.2f} (balance: {user.earnings:.2f})")
    if payout_in.amount > user.earnings:
        logger.warning(f"Payout request of {payout_in.amount:.2f} by user {user.id} exceeds balance {user.earnings:.2f}.")
        raise ValidationConflictError("Requested amount exceeds current earnings")

    db_payout = Payout(
        user_id=user.id,
        amount=payout_in.amount,
        payment_method=payout_in.payment_method,
        status=PayoutStatus.PENDING,
    )
    db.add(db_payout)
    db.commit()
    db.refresh(db_payout)
    logger.info(f"Payout ID {db_payout.id} created for user {user.id} (amount: {db_payout.amount:.2f}).")
    return db_payout

def get_payout(db: Session, payout_id: int) -> Optional[Payout]:
    logger.debug(f"Fetching payout with ID: {payout_id}")
    return db.query(Payout).filter(Payout.id == payout_id).first()

def get_user_payouts(db: Session, user_id: int) -> List[Payout]:
    logger.debug(f"Fetching payouts for user_id {user_id}")
    return db.query(Payout).filter(Payout.user_id == user_id).order_by(Payout.id.desc()).all()

def get_payouts(db: Session, status: Optional[PayoutStatus] = None, skip: int = 0, limit: int = 100) -> List[Payout]: # For Admin
    logger.debug(f"Admin fetching payouts. Status: {status}, skip: {skip}, limit: {limit}")
    query = db.query(Payout)
    if status:
        query = query.filter(Payout.status == status)
    return query.order_by(Payout.id.desc()).offset(skip).limit(limit).all()

def count_payouts(db: Session, status: PayoutStatus) -> int:
    return db.query(func.count(Payout.id)).filter(Payout.status == status).scalar() or 0

def sum_payouts(db: Session, status: PayoutStatus) -> float:
    return db.query(func.sum(Payout.amount)).filter(Payout.status == status).scalar() or 0.0

def process_payout(db: Session, payout_id: int, process_in: schemas.PayoutProcess, admin_id: int) -> Payout:
    """
    Moves a pending payout to paid or failed.

    The user's earnings are decremented by the payout amount only when the new
    status is paid. The decrement and the status change commit together.

    Raises:
        NotFoundError: the payout, or its user, does not exist.
        ValidationConflictError: the payout is not pending, or the user's
            balance no longer covers the amount.
    """
    db_payout = get_payout(db, payout_id)
    if not db_payout:
        logger.warning(f"Payout with ID {payout_id} not found for processing.")
        raise NotFoundError("Payout not found")

    if db_payout.status != PayoutStatus.PENDING:
        logger.warning(f"Payout ID {payout_id} already processed (status: {db_payout.status.value}).")
        raise ValidationConflictError(f"Payout has already been processed (status: {db_payout.status.value})")

    if process_in.status == PayoutStatus.PAID:
        try:
            user_crud.adjust_user_earnings(db, db_payout.user_id, -db_payout.amount)
        except Exception:
            db.rollback()
            raise

    db_payout.status = process_in.status
    db_payout.transaction_id = process_in.transaction_id
    db_payout.processed_by_id = admin_id
    db_payout.processed_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(db_payout)
    logger.info(f"Payout ID {payout_id} processed by admin {admin_id}: {db_payout.status.value} (amount: {db_payout.amount:.2f}).")
    return db_payout
