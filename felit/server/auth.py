"""Authentication utilities, session gate dependencies and login/logout routes."""
from typing import Optional

import bcrypt
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from . import schemas
from .config import BCRYPT_ROUNDS, LOGIN_PAGE
from .database import get_db
from .logging_config import configure_logging
from .models import User
from .sessions import SESSION_ID_KEY, SessionStore, SessionUser

router = APIRouter(tags=["auth"])
logger = configure_logging()

INVALID_CREDENTIALS = "Invalid username/password"


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def _session_user(request: Request) -> Optional[SessionUser]:
    return get_session_store(request).get(request.session.get(SESSION_ID_KEY))


def get_current_session(request: Request) -> SessionUser:
    """FastAPI dependency returning the authenticated session for API routes."""
    current = _session_user(request)
    if current is None:
        logger.warning("UNAUTHORIZED_ACCESS path=%s", request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return current


def require_page_session(request: Request) -> SessionUser:
    """Like get_current_session, but sends browsers to the login page."""
    current = _session_user(request)
    if current is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="See Other",
            headers={"Location": LOGIN_PAGE},
        )
    return current


def require_admin(current: SessionUser = Depends(get_current_session)) -> SessionUser:
    if not current.is_admin:
        logger.warning("FORBIDDEN_ACCESS username=%s", current.username)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return current


async def _read_credentials(request: Request) -> Optional[schemas.LoginRequest]:
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            data = await request.json()
        else:
            data = dict(await request.form())
        return schemas.LoginRequest(**data)
    except (ValueError, TypeError, ValidationError):
        return None


def _authenticate(db: Session, username: str, password: str) -> Optional[User]:
    user: Optional[User] = db.query(User).filter(User.username == username).first()
    if not user:
        logger.info("LOGIN_FAIL username=%s reason=not_found", username)
        return None
    if not verify_password(password, user.password_hash):
        logger.info("LOGIN_FAIL username=%s reason=bad_password", username)
        return None
    return user


@router.post("/login")
async def login(request: Request, db: Session = Depends(get_db)):
    credentials = await _read_credentials(request)
    if credentials is None:
        logger.info("LOGIN_FAIL reason=missing_fields")
        return PlainTextResponse(INVALID_CREDENTIALS, status_code=status.HTTP_401_UNAUTHORIZED)

    user = await run_in_threadpool(_authenticate, db, credentials.username, credentials.password)
    if user is None:
        return PlainTextResponse(INVALID_CREDENTIALS, status_code=status.HTTP_401_UNAUTHORIZED)

    store = get_session_store(request)
    store.discard(request.session.get(SESSION_ID_KEY))
    request.session.clear()
    request.session[SESSION_ID_KEY] = store.create(user.id, user.username, user.is_admin)
    logger.info("LOGIN_SUCCESS username=%s user_id=%s admin=%s", user.username, user.id, user.is_admin)
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/logout")
def logout(request: Request):
    removed = get_session_store(request).discard(request.session.get(SESSION_ID_KEY))
    request.session.clear()
    if removed:
        logger.info("LOGOUT username=%s user_id=%s", removed.username, removed.user_id)
    return RedirectResponse(url=LOGIN_PAGE, status_code=status.HTTP_303_SEE_OTHER)
