"""Resource handlers rendering linked models into artifacts."""

from kubegen.handlers.base import BaseHandler, ProgressCallback
from kubegen.handlers.docker import DockerHandler
from kubegen.handlers.registry import HandlerRegistry

__all__ = [
    "BaseHandler",
    "DockerHandler",
    "HandlerRegistry",
    "ProgressCallback",
]
