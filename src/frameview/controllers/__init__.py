"""Input controllers"""

from .navigation_controller import NavigationController

__all__ = ['NavigationController']
