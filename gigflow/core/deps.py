# gigflow/core/deps.py
from fastapi import Request

from gigflow.core.config import Settings
from gigflow.db.store import EntityStore


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
