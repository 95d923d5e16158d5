"""
Utility functions
"""
from workbench.utils.logger import setup_logger, get_logger
from workbench.utils.auth import (
    Credential,
    MissingCredential,
    StaticTokenProvider,
    EnvTokenProvider,
    require_auth,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "Credential",
    "MissingCredential",
    "StaticTokenProvider",
    "EnvTokenProvider",
    "require_auth",
]
