from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends, Form, Cookie, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
import logging
import uvicorn

from .config import settings
from .db import get_db, init_db
from . import credentials, sessions
from .errors import (
    AccountServiceError,
    AlreadyRegistered,
    InvalidPassword,
    MalformedToken,
    NotFoundOrUnauthorized,
    StorageError,
    status_code_for,
)
from .profile import get_profile
from .routes import health
from .sessions import SESSION_COOKIE
from .utils.event_logger import log_account_event

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Account Service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)


@app.exception_handler(AccountServiceError)
async def account_error_handler(request: Request, exc: AccountServiceError):
    status_code = status_code_for(exc)
    if isinstance(exc, StorageError):
        # never echo storage details to the caller
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return Response(status_code=status_code)
    return PlainTextResponse(exc.message, status_code=status_code)


@app.post("/register")
def register(
    request: Request,
    name: str = Form(default=""),
    password: str = Form(default=""),
    db: Session = Depends(get_db),
):
    try:
        credentials.register(name, password, db)
    except AlreadyRegistered:
        log_account_event("register_conflict", name, request)
        raise
    log_account_event("register_success", name, request)
    return Response(status_code=200)


@app.post("/auth")
def auth(
    request: Request,
    name: str = Form(default=""),
    password: str = Form(default=""),
    db: Session = Depends(get_db),
):
    try:
        user_id = credentials.verify(name, password, db)
    except (NotFoundOrUnauthorized, InvalidPassword) as e:
        log_account_event("auth_failure", name, request, reason=type(e).__name__)
        raise
    token = sessions.issue(user_id, db)
    log_account_event("auth_success", name, request, user_id=user_id)

    response = Response(status_code=200)
    response.set_cookie(SESSION_COOKIE, token)
    return response


@app.api_route("/deauth", methods=["GET", "POST"])
def deauth(
    request: Request,
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
    db: Session = Depends(get_db),
):
    token = sessions.validate_token(session_token)
    # the caller cannot tell whether the token was valid before, only that it is not valid now
    sessions.revoke(token, db)
    log_account_event("deauth", None, request)
    return Response(status_code=200)


@app.api_route("/profile", methods=["GET", "POST"])
def profile(
    request: Request,
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE),
    db: Session = Depends(get_db),
):
    try:
        token = sessions.validate_token(session_token)
        account = get_profile(token, db)
    except (NotFoundOrUnauthorized, MalformedToken) as e:
        log_account_event("profile_denied", None, request, reason=type(e).__name__)
        raise
    return PlainTextResponse(account.describe())


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
