"""
SDLC Demo API — FastAPI Dependencies
=====================================

What:  Hands per-app state to route handlers.
Why:   The accounting subsystem and the demo stores belong to the app
       instance (app.state), not to module globals, so routes fetch them
       from the request instead of importing singletons.
"""

from fastapi import Request

from demo_api.config import Settings
from demo_api.services.accounting import RequestAccounting
from demo_api.services.task_service import TaskService
from demo_api.services.user_service import UserService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_accounting(request: Request) -> RequestAccounting:
    return request.app.state.accounting


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service
