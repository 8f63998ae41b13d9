"""Service layer: query execution and per-client page state."""

from .guide_service import GuideService
from .view_state import InvalidTransition, ViewState, ViewStateStore

__all__ = ['GuideService', 'InvalidTransition', 'ViewState', 'ViewStateStore']
