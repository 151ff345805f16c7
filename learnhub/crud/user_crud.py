from sqlalchemy.orm import Session
from sqlalchemy import func
import logging
import secrets
import string
from typing import List, Optional

from learnhub.core.errors import NotFoundError, ValidationConflictError
from learnhub.models.user_model import User
from learnhub.models.enums import UserRole
from learnhub.schemas.user_schema import UserCreateInternal

logger = logging.getLogger(__name__)

_REFERRAL_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def generate_referral_code(user_id: int) -> str:
    """REF<id><5 random chars>; the id prefix keeps codes unique."""
    suffix = "".join(secrets.choice(_REFERRAL_SUFFIX_ALPHABET) for _ in range(5))
    return f"REF{user_id}{suffix}"

def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    """Fetches a user by their internal database ID."""
    logger.debug(f"Fetching user by ID: {user_id}")
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    logger.debug(f"Fetching user by username: {username}")
    return db.query(User).filter(User.username == username).first()

def get_user_by_referral_code(db: Session, referral_code: str) -> Optional[User]:
    """Fetches a user by their referral code."""
    logger.debug(f"Fetching user by referral code: {referral_code}")
    return db.query(User).filter(User.referral_code == referral_code).first()

def create_user(db: Session, user_data: UserCreateInternal) -> User:
    """
    Creates a new user with a freshly generated referral code.
    Raises ValidationConflictError if the username is already taken.
    """
    logger.info(f"Attempting to create user '{user_data.username}' (role: {user_data.role.value}, referred_by: {user_data.referred_by})")

    if get_user_by_username(db, user_data.username):
        logger.warning(f"User creation failed: username '{user_data.username}' already exists.")
        raise ValidationConflictError("Username already exists")

    db_user = User(
        username=user_data.username,
        password_hash=user_data.password_hash,
        email=user_data.email,
        role=user_data.role,
        referred_by=user_data.referred_by,
        earnings=0.0,
        referral_code=secrets.token_hex(8), # Placeholder until the id is known
    )
    db.add(db_user)
    db.flush() # Get the id for the referral code without ending the transaction
    db_user.referral_code = generate_referral_code(db_user.id)

    db.commit()
    db.refresh(db_user)
    logger.info(f"User '{db_user.username}' (ID: {db_user.id}) created with referral code {db_user.referral_code}.")
    return db_user

def get_users(db: Session, role: Optional[UserRole] = None, skip: int = 0, limit: int = 100) -> List[User]:
    logger.debug(f"Fetching users with role: {role}, skip: {skip}, limit: {limit}")
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    return query.order_by(User.id).offset(skip).limit(limit).all()

def count_users(db: Session, role: Optional[UserRole] = None) -> int:
    query = db.query(func.count(User.id))
    if role:
        query = query.filter(User.role == role)
    return query.scalar() or 0

def count_referred_users(db: Session, referral_code: str) -> int:
    """Number of users who signed up with the given referral code."""
    return db.query(func.count(User.id)).filter(User.referred_by == referral_code).scalar() or 0

def adjust_user_earnings(db: Session, user_id: int, delta: float) -> None:
    """
    Adds delta (negative to withdraw) to a user's earnings balance.

    The change is a single conditional UPDATE; a withdrawal only applies while
    the balance still covers it. Does not commit: callers commit together with
    the record that justifies the change.

    Raises:
        NotFoundError: the user does not exist.
        ValidationConflictError: a withdrawal exceeds the current balance.
    """
    logger.debug(f"Adjusting earnings for user_id {user_id} by {delta}")
    query = db.query(User).filter(User.id == user_id)
    if delta < 0:
        query = query.filter(User.earnings >= -delta)

    updated_rows = query.update({User.earnings: User.earnings + delta}, synchronize_session=False)
    if updated_rows:
        db.expire_all() # Loaded User objects hold the old balance
        return

    if get_user_by_id(db, user_id) is None:
        logger.error(f"Earnings adjustment failed: user ID {user_id} not found.")
        raise NotFoundError(f"User with ID {user_id} not found")
    logger.warning(f"Earnings adjustment of {delta} rejected for user ID {user_id}: insufficient balance.")
    raise ValidationConflictError("Insufficient earnings")
