"""Query services layered on the reference store."""

from stdref.core.services.resolver import Resolver

__all__ = ["Resolver"]
