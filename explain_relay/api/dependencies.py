"""
Dependency providers for FastAPI endpoints.

Settings and the completion client are built once by the app factory and
kept on ``app.state``; handlers receive them through these providers.
"""
from fastapi import Depends, Request

from explain_relay.config.settings import Settings
from explain_relay.controllers.explain_controller import ExplainController
from explain_relay.services.completion_client import CompletionClient


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_completion_client(request: Request) -> CompletionClient:
    """Completion client shared by all requests of the running app."""
    return request.app.state.completion_client


def get_explain_controller(
    completion_client: CompletionClient = Depends(get_completion_client),
) -> ExplainController:
    """Dependency injection for ExplainController."""
    return ExplainController(completion_client)
