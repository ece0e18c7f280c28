"""
chatwootctl - Interactive Chatwoot installer and manager for Docker hosts
"""

__version__ = "1.0.0"

from .core import ChatwootManager
from .errors import ManagerError

__all__ = ["ChatwootManager", "ManagerError"]
