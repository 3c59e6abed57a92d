from .server import MockPaymentsApiServer

__all__ = ["MockPaymentsApiServer"]
