from .bootstrap import SessionBootstrap, SessionState, SessionStatus, StaticTokenSource

__all__ = [
    "SessionBootstrap",
    "SessionState",
    "SessionStatus",
    "StaticTokenSource",
]
