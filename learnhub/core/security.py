import logging

import bcrypt
from starlette.requests import Request

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"

# --- Passwords ---

def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in the database
        logger.error("Stored password hash could not be parsed.", exc_info=True)
        return False

# --- Cookie session ---
# The signed session cookie itself is handled by Starlette's SessionMiddleware;
# these helpers only read and write the authenticated user id inside it.

def login_session(request: Request, user_id: int) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user_id
    logger.debug(f"Session started for user ID {user_id}")

def logout_session(request: Request) -> None:
    user_id = request.session.get(SESSION_USER_KEY)
    request.session.clear()
    logger.debug(f"Session cleared for user ID {user_id}")

def get_session_user_id(request: Request):
    return request.session.get(SESSION_USER_KEY)
