"""Core components of the reference oracle."""

from stdref.core.oracle import ReferenceOracle
from stdref.core.services.resolver import Resolver
from stdref.core.store import ReferenceStore

__all__ = ["ReferenceOracle", "ReferenceStore", "Resolver"]
