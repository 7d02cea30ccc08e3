"""FastAPI application entry point."""
from __future__ import annotations
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from academy.api import admin, auth, courses
from academy.core.config import CORS_ORIGINS, LOG_LEVEL
from academy.persistence.db import init_db

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ------------------------------------------------------------------
# App creation
# ------------------------------------------------------------------
app = FastAPI(
    title="Family History Academy API",
    description="Courses, badges and learner progress for Family History Academy",
    version="1.0.0",
)

# The web client runs on its own origin and sends the auth cookie along
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------
# Startup: initialise DB schema
# ------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    init_db()


@app.get("/")
def root():
    return {"message": "FamilyHistoryAcademy Server"}


# ------------------------------------------------------------------
# Routers
# ------------------------------------------------------------------
app.include_router(auth.router)
app.include_router(courses.router)
app.include_router(admin.router)
