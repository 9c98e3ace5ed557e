"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from smartspend_companion.companion.dialogue import DialogueBank
from smartspend_companion.companion.queue import ReactionQueue, RecentReactions
from smartspend_companion.infrastructure.clients.budget import BudgetClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_budget_client() -> BudgetClient:
    """Provide budget store client instance"""
    return BudgetClient()


def get_reaction_queue(request: Request) -> ReactionQueue:
    """The session's reaction queue, owned by the app instance"""
    return request.app.state.reaction_queue


def get_recent_reactions(request: Request) -> RecentReactions:
    return request.app.state.recent_reactions


def get_dialogue(request: Request) -> DialogueBank:
    return request.app.state.dialogue
