from .session import Session, SessionState
from .coordinator import InvocationCoordinator, InvocationPhase

__all__ = ["Session", "SessionState", "InvocationCoordinator", "InvocationPhase"]
