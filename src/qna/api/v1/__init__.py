from .error_handlers import register_exception_handlers
from .routes import router

__all__ = ["register_exception_handlers", "router"]
