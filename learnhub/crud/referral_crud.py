from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional
import logging

from learnhub.models.referral_model import Earning
from learnhub.models.enums import EarningSource
from learnhub.schemas import referral_schema as schemas
from learnhub.crud import user_crud

logger = logging.getLogger(__name__)

# --- Earning ledger CRUD ---

def credit_earning(db: Session, earning_in: schemas.EarningCreate) -> Earning:
    """
    Records a ledger entry and adds its amount to the user's balance in one commit.
    Raises NotFoundError (from adjust_user_earnings) if the user does not exist.
    """
    logger.info(f"Crediting {earning_in.amount:.2f} to user_id {earning_in.user_id} ({earning_in.source.value})")
    db_earning = Earning(**earning_in.model_dump())
    db.add(db_earning)
    try:
        user_crud.adjust_user_earnings(db, earning_in.user_id, earning_in.amount)
    except Exception:
        db.rollback()
        raise
    db.commit()
    db.refresh(db_earning)
    logger.info(f"Earning (ID: {db_earning.id}) credited to user {db_earning.user_id}.")
    return db_earning

def get_user_earnings(
    db: Session,
    user_id: int,
    source: Optional[EarningSource] = None,
    skip: int = 0,
    limit: int = 100
) -> List[Earning]:
    logger.debug(f"Fetching earnings for user_id {user_id}, source {source}, skip {skip}, limit {limit}")
    query = db.query(Earning).filter(Earning.user_id == user_id)
    if source:
        query = query.filter(Earning.source == source)
    return query.order_by(Earning.id.desc()).offset(skip).limit(limit).all()

def sum_course_sales(db: Session, course_id: int) -> float:
    """Total educator earnings credited for sales of one course."""
    return db.query(func.sum(Earning.amount)).filter(
        Earning.course_id == course_id,
        Earning.source == EarningSource.COURSE_SALE
    ).scalar() or 0.0

def sum_all_earnings(db: Session) -> float:
    return db.query(func.sum(Earning.amount)).scalar() or 0.0
