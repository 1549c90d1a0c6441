"""
Resumable upload dependencies.

ONLY handles dependency injection for the upload endpoint.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from ...core.context import OperationContext
from ..application.services.upload_coordinator import UploadCoordinator


async def get_upload_coordinator(request: Request) -> UploadCoordinator:
    """Coordinator created by the application factory."""
    return request.app.state.coordinator


async def get_operation_context(
    x_request_id: Optional[str] = Header(default=None),
    x_request_timeout: Optional[float] = Header(default=None, gt=0),
) -> OperationContext:
    """Per-request operation context.

    ``X-Request-ID`` is propagated when present; ``X-Request-Timeout`` (seconds)
    bounds the whole operation.
    """
    kwargs = {"request_id": x_request_id} if x_request_id else {}
    if x_request_timeout:
        return OperationContext.with_timeout(x_request_timeout, **kwargs)
    return OperationContext(**kwargs)


# Type aliases for dependency injection
UploadCoordinatorDep = Annotated[UploadCoordinator, Depends(get_upload_coordinator)]
OperationContextDep = Annotated[OperationContext, Depends(get_operation_context)]
