# ruff: noqa: F403, F401
"""Schemas package initialization."""

# Import all schemas to ensure they're registered
from .ai import *
from .base import *
from .group import *
from .message import *
from .user import *
