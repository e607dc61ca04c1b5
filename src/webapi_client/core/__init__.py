from .method import HTTPMethod
from .resource import Resource

__all__ = ["HTTPMethod", "Resource"]
