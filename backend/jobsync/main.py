from __future__ import annotations
from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware

from jobsync.api import auth, health, runs, sync
from jobsync.core.config import settings
from jobsync.core.logging import configure_logging
from jobsync.db.database import SessionLocal
from jobsync.db.init_db import init_db
from jobsync.services.scheduler import SyncScheduler

app = FastAPI(title=settings.app_name)
app.state.scheduler = SyncScheduler(SessionLocal)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    configure_logging()
    init_db()
    if settings.scheduler_enabled:
        app.state.scheduler.start()


@app.on_event("shutdown")
def on_shutdown():
    app.state.scheduler.stop(wait=False)


app.include_router(health.router)
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(sync.router, prefix=settings.api_prefix)
app.include_router(runs.router, prefix=settings.api_prefix)


def serve() -> None:
    uvicorn.run("jobsync.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    serve()
