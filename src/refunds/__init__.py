from .workflow import RefundOutcome, RefundResult, RefundState, RefundWorkflow

__all__ = [
    "RefundOutcome",
    "RefundResult",
    "RefundState",
    "RefundWorkflow",
]
