"""
Utilities Package
Settings, logging and RPC provider helpers
"""

from .settings import DeploySettings
from .logging_config import setup_logging
from .provider import connect, ensure_connected

__all__ = [
    'DeploySettings',
    'setup_logging',
    'connect',
    'ensure_connected'
]
