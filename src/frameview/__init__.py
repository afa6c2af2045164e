"""
frameview - interactive 360° frame viewer service
"""

__version__ = "1.0.0"
