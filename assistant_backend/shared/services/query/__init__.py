"""
Request orchestration.
"""

from .orchestrator import Orchestrator, ExecutionPlan

__all__ = ["Orchestrator", "ExecutionPlan"]
