import asyncio
from fastapi import APIRouter, status
from core.config import settings
from core.errors import ExecutionTimeoutError
from core.logging import get_logger
from schemas.code import CompileRequest, CompileResponse, ErrorMessage
from sandbox.dispatcher import execute_code

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "/compile",
    response_model=CompileResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorMessage},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorMessage},
    },
)
async def compile_code(code_request: CompileRequest) -> CompileResponse:
    logger.debug("lang: %s", code_request.lang)

    run = execute_code(code_request.lang, code_request.content, code_request.stdin)
    timeout = settings.EXECUTION_TIMEOUT_SECONDS
    if timeout is None:
        result = await run
    else:
        # cancelling the submission kills the child and clears its scratch files
        try:
            result = await asyncio.wait_for(run, timeout=timeout)
        except asyncio.TimeoutError:
            raise ExecutionTimeoutError(timeout) from None

    return CompileResponse(result=result)
