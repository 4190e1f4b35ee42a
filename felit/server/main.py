"""FastAPI application entrypoint for the chat server."""
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from . import admin, auth, messages, schemas
from .config import (
    DATABASE_URL,
    HOST,
    PAGES_DIR,
    PORT,
    SESSION_COOKIE,
    SESSION_MAX_AGE,
    SESSION_SECRET,
    STATIC_DIR,
)
from .database import create_db_engine, create_session_factory, init_db
from .logging_config import configure_logging
from .sessions import SessionStore, SessionUser

logger = configure_logging()


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError):
        return PlainTextResponse("Bad Request", status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error(request: Request, exc: SQLAlchemyError):
        logger.error("STORAGE_ERROR path=%s error=%s", request.url.path, exc, exc_info=exc)
        return PlainTextResponse("Server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app(database_url: Optional[str] = None, session_secret: Optional[str] = None) -> FastAPI:
    """Build the application with its own engine, session factory and session store."""
    engine = create_db_engine(database_url or DATABASE_URL)
    init_db(engine)

    app = FastAPI(title="Felit Chat Server", version="2.2.0")
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.sessions = SessionStore(max_age=SESSION_MAX_AGE)

    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret or SESSION_SECRET,
        session_cookie=SESSION_COOKIE,
        max_age=SESSION_MAX_AGE,
        same_site="lax",
    )
    _register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(messages.router)
    app.include_router(admin.router)

    @app.get("/")
    def index(_: SessionUser = Depends(auth.require_page_session)):
        return FileResponse(PAGES_DIR / "chat.html")

    @app.get("/.well-known/health", response_model=schemas.HealthOut)
    def health():
        return schemas.HealthOut()

    # Mounted last so it only serves paths no route claims.
    app.mount("/", StaticFiles(directory=STATIC_DIR), name="static")
    return app


app = create_app()


def run() -> None:
    logger.info("SERVER_START host=%s port=%s", HOST, PORT)
    uvicorn.run("felit.server.main:app", host=HOST, port=PORT, reload=False)


if __name__ == "__main__":
    run()
