"""Service layer."""

from .code_store import CodeLocks, CodeStore, ExplicitCode, RandomCode

__all__ = ["CodeLocks", "CodeStore", "ExplicitCode", "RandomCode"]
