"""
Splitit Backend API

A FastAPI backend for shared expense groups and their transactions.
This module sets up the app and mounts routers - all endpoint logic is in routers/.
"""

import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import models
from database import engine
from exceptions import add_exception_handlers

# Import routers
from routers import groups, transactions


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Create database tables
models.Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title="Splitit API",
    description="API for shared expense groups, their members and transactions",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to frontend domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", "Link", "X-Total-Count", "X-splititApp-alert", "X-splititApp-error", "X-splititApp-params"],
)

add_exception_handlers(app)

# Include routers
app.include_router(groups.router)
app.include_router(transactions.router)
