from fastapi import APIRouter, Depends, Query, Response, status
from config.settings import settings
from controller.controller_dependencies import get_function_service
from model.api import CodeRequest, CodeResponse
from model.code import PageResult
from service.function_service import FunctionService
from util.constants import InternalURIs

function_router = APIRouter()


@function_router.get(
    InternalURIs.FUNCTIONS,
    response_model=PageResult,
    response_model_exclude_none=True,
)
async def list_functions(
    page: int = Query(1),
    perPage: int = Query(settings.DEFAULT_PER_PAGE),
    service: FunctionService = Depends(get_function_service),
) -> PageResult:
    return await service.list_namespaces(page, perPage)


@function_router.post(InternalURIs.FUNCTION_ITEM, response_model=CodeResponse)
async def create_function(
    namespace: str,
    id: str,
    payload: CodeRequest,
    service: FunctionService = Depends(get_function_service),
) -> CodeResponse:
    record = await service.create_code(namespace, id, payload.code)
    return CodeResponse(**record.model_dump())


@function_router.put(InternalURIs.FUNCTION_ITEM, response_model=CodeResponse)
async def update_function(
    namespace: str,
    id: str,
    payload: CodeRequest,
    service: FunctionService = Depends(get_function_service),
) -> CodeResponse:
    record = await service.update_code(namespace, id, payload.code)
    return CodeResponse(**record.model_dump())


@function_router.get(InternalURIs.FUNCTION_ITEM, response_model=CodeResponse)
async def get_function(
    namespace: str,
    id: str,
    response: Response,
    service: FunctionService = Depends(get_function_service),
) -> CodeResponse:
    record = await service.get_code(namespace, id)
    response.headers["ETag"] = record.hash
    return CodeResponse(**record.model_dump())


@function_router.delete(
    InternalURIs.FUNCTION_ITEM, status_code=status.HTTP_204_NO_CONTENT
)
async def delete_function(
    namespace: str,
    id: str,
    service: FunctionService = Depends(get_function_service),
) -> Response:
    await service.delete_code(namespace, id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
