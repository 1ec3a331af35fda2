from __future__ import annotations
from fastapi import Depends, HTTPException, Request
from fastapi.security import OAuth2PasswordBearer

from jobsync.core.config import settings
from jobsync.core.security import token_subject
from jobsync.services.scheduler import SyncScheduler

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.api_prefix}/auth/login")


def require_operator(token: str = Depends(oauth2_scheme)) -> str:
    subject = token_subject(token)
    if not subject:
        raise HTTPException(status_code=401, detail="Invalid token")
    return subject


def get_scheduler(request: Request) -> SyncScheduler:
    return request.app.state.scheduler
