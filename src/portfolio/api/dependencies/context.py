"""Application context dependency."""

from typing import Annotated

from fastapi import Depends, Request

from src.portfolio.core.context import AppContext


def get_app_context(request: Request) -> AppContext:
    """Get the context built by the application lifespan."""
    return request.app.state.context


AppContextDep = Annotated[AppContext, Depends(get_app_context)]
