"""HTTP routes for the bank service."""
from bank_service.api.routes import router

__all__ = ["router"]
