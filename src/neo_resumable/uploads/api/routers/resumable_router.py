"""
Resumable upload router.

ONLY handles the resumable upload endpoint. One path serves every
operation, selected by HTTP method:

- POST: initiate (JSON body), or complete when ``file_id`` is given
- PUT: upload chunk ``chunk_number`` of ``file_id`` (raw body)
- GET: session status
- DELETE: abort

Any other method is answered with 405.
"""

from typing import Optional, Union

from fastapi import APIRouter, Body, Query, Request, Response, status

from ...core.exceptions import InvalidUploadRequest, UploadSessionNotFound
from ...core.value_objects import UploadSessionId
from ...infrastructure.streams import IteratorStream
from ..dependencies import OperationContextDep, UploadCoordinatorDep
from ..models import InitiateUploadRequest, UploadResultResponse, UploadSessionResponse

FILE_ID_DESCRIPTION = "Upload session identifier"


def checked_file_id(file_id: str) -> str:
    """A malformed id names no session; reject it before touching the registry."""
    if not UploadSessionId.is_valid(file_id):
        raise UploadSessionNotFound(file_id)
    return file_id


async def initiate_or_complete_upload(
    coordinator: UploadCoordinatorDep,
    ctx: OperationContextDep,
    request: Optional[InitiateUploadRequest] = Body(default=None),
    file_id: Optional[str] = Query(default=None, description="Complete this session instead of initiating"),
) -> Union[UploadSessionResponse, UploadResultResponse]:
    """Initiate a resumable upload, or complete one when ``file_id`` is set."""
    if file_id is not None:
        result = await coordinator.complete_upload(checked_file_id(file_id), ctx)
        return UploadResultResponse.from_domain(result)

    if request is None:
        raise InvalidUploadRequest("Request body is required to initiate an upload")

    session = await coordinator.initiate_upload(
        file_name=request.file_name,
        total_size=request.total_size,
        mime_type=request.mime_type,
        chunk_size=request.effective_chunk_size(coordinator.config.default_chunk_size),
        ctx=ctx,
    )
    return UploadSessionResponse.from_domain(session)


async def upload_chunk(
    raw_request: Request,
    coordinator: UploadCoordinatorDep,
    ctx: OperationContextDep,
    file_id: str = Query(..., description=FILE_ID_DESCRIPTION),
    chunk_number: int = Query(..., description="Zero-based chunk index"),
) -> Response:
    """Upload one chunk; the request body is the raw chunk bytes."""
    await coordinator.upload_chunk(
        checked_file_id(file_id), chunk_number, IteratorStream(raw_request.stream()), ctx
    )
    return Response(status_code=status.HTTP_200_OK)


async def get_upload_status(
    coordinator: UploadCoordinatorDep,
    ctx: OperationContextDep,
    file_id: str = Query(..., description=FILE_ID_DESCRIPTION),
) -> UploadSessionResponse:
    """Current state of an upload session."""
    session = await coordinator.get_upload_status(checked_file_id(file_id), ctx)
    return UploadSessionResponse.from_domain(session)


async def abort_upload(
    coordinator: UploadCoordinatorDep,
    ctx: OperationContextDep,
    file_id: str = Query(..., description=FILE_ID_DESCRIPTION),
) -> Response:
    """Abort an upload session and discard its chunks."""
    await coordinator.abort_upload(checked_file_id(file_id), ctx)
    return Response(status_code=status.HTTP_200_OK)


def create_resumable_router(path: str = "/uploads/resumable") -> APIRouter:
    """Build the router serving the resumable upload endpoint at ``path``."""
    router = APIRouter(tags=["Resumable Uploads"])

    router.add_api_route(
        path,
        initiate_or_complete_upload,
        methods=["POST"],
        response_model=Union[UploadSessionResponse, UploadResultResponse],
        summary="Initiate or complete a resumable upload",
    )
    router.add_api_route(
        path,
        upload_chunk,
        methods=["PUT"],
        response_class=Response,
        summary="Upload a chunk",
    )
    router.add_api_route(
        path,
        get_upload_status,
        methods=["GET"],
        response_model=UploadSessionResponse,
        summary="Get upload status",
    )
    router.add_api_route(
        path,
        abort_upload,
        methods=["DELETE"],
        response_class=Response,
        summary="Abort an upload",
    )
    return router
