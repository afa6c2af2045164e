from .error_handler import (
    DomainError,
    ProductNotFoundError,
    ViewerNotFoundError,
    ColorNotFoundError,
    register_exception_handlers,
)

__all__ = [
    "DomainError",
    "ProductNotFoundError",
    "ViewerNotFoundError",
    "ColorNotFoundError",
    "register_exception_handlers",
]
