"""Shared dependencies for API endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from ..services import CodeStore


def get_code_store(request: Request) -> CodeStore:
    """Get the code store owned by the running application."""
    return request.app.state.code_store


# Type alias for cleaner endpoint signatures
CodeStoreDep = Annotated[CodeStore, Depends(get_code_store)]
