import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import APIRouter, Depends, Request

from presign_gateway.api.deps import get_presign_service
from presign_gateway.core.errors import ClientDisconnectedError
from presign_gateway.schemas import ErrorResponse, PresignRequest, PresignResponse
from presign_gateway.services.presign import PresignService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["presign"])

T = TypeVar("T")


async def _wait_for_disconnect(request: Request) -> None:
    # The body has already been read; the next message is http.disconnect.
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


async def _run_until_disconnect(request: Request, work: Awaitable[T]) -> T:
    work_task = asyncio.ensure_future(work)
    disconnect_task = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait(
            {work_task, disconnect_task}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        disconnect_task.cancel()
        if not work_task.done():
            work_task.cancel()
            await asyncio.gather(work_task, return_exceptions=True)

    if work_task in done:
        return work_task.result()
    logger.info("Client disconnected from %s; signing aborted", request.url.path)
    raise ClientDisconnectedError()


@router.post(
    "/presign",
    response_model=PresignResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def presign_download(
    payload: PresignRequest,
    request: Request,
    service: PresignService = Depends(get_presign_service),
) -> PresignResponse:
    return await _run_until_disconnect(request, service.presign(payload))
