"""
Middleware components for the web server.
"""

from .monitoring import add_monitoring_middleware, record_llm_request, update_active_sessions

__all__ = [
    "add_monitoring_middleware",
    "record_llm_request", 
    "update_active_sessions"
] 