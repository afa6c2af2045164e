from .base import IKeyboardAdapter
from .factory import create_keyboard_adapter

__all__ = ["IKeyboardAdapter", "create_keyboard_adapter"]
