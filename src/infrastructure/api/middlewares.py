from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware


def allowed_origins() -> list[str]:
    override = os.getenv("CORS_ORIGINS")
    if override:
        return [origin.strip() for origin in override.split(",") if origin.strip()]

    env = os.getenv("ENV", "development")
    if env in ("development", "staging"):
        # Web PWA, admin panel and Electron dev servers
        return [
            "http://localhost:3000",
            "http://localhost:3001",
            "http://localhost:3002",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:3001",
            "http://127.0.0.1:3002",
        ]
    return ["*"]


def add_default_middlewares(app: FastAPI) -> None:
    origins = allowed_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers refuse credentials with a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "PATCH", "OPTIONS"],
        allow_headers=["*"],
    )
