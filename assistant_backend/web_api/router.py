"""
Web API Router - Routes for the editor frontend.
"""

from fastapi import APIRouter
from .web_api import sessions, ai

router = APIRouter()

# Include web API sub-routers
router.include_router(sessions.router, tags=["web-sessions"])
router.include_router(ai.router, tags=["web-ai"])
