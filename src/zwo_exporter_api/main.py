"""Main FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from zwo_exporter_api.api.routes import router
from zwo_exporter_api.config import settings

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title="ZWO Exporter API")

# Configure CORS to allow requests from the browser extension / UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
