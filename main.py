import routes
from contextlib import asynccontextmanager
from typing import Optional
from util.enums import Environment, Color
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from redis.exceptions import RedisError
from config.settings import settings
from config.cache import close_redis, get_redis
from controller.controller_dependencies import get_function_service
from core.artifact_cache import CompiledArtifactCache
from core.connection import ConnectionMonitor
from service.function_service import FunctionService
from util.constants import InternalURIs
from util.errors import AppError, PaginationError
from util.logger import init_logger
import logging

logger = logging.getLogger(__name__)


async def _shutdown(monitor: Optional[ConnectionMonitor]) -> None:
    try:
        if monitor is not None:
            await monitor.stop()
        await close_redis()
    except Exception as e:
        print("Error closing Redis:", e)


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    monitor: Optional[ConnectionMonitor] = None
    try:
        init_logger()
        print(f"{Color.GREEN}Initializing...{Color.RESET}")
        redis = await get_redis()
        monitor = ConnectionMonitor(redis, interval=settings.REDIS_HEALTH_CHECK_INTERVAL)
        monitor.start()
        await monitor.wait_ready(timeout=settings.REDIS_CONNECT_TIMEOUT * 5)
        fastApi.state.redis_monitor = monitor
        fastApi.state.artifact_cache = CompiledArtifactCache()
        print(f"{Color.BLUE}Server Started{Color.RESET}")
    except Exception as e:
        print("Failed to connect to Redis:", e)
        await _shutdown(monitor)
        raise

    try:
        yield
    finally:
        await _shutdown(monitor)
        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(lifespan=lifespan)


@app.get(InternalURIs.HEALTHCHECK, response_class=PlainTextResponse)
async def healthcheck(
    request: Request, service: FunctionService = Depends(get_function_service)
):
    monitor: Optional[ConnectionMonitor] = getattr(
        request.app.state, "redis_monitor", None
    )
    if monitor is None:
        await service.ping()
        return "WORKING"

    # check() pings and refreshes the monitor's healthy/last_error state
    if not await monitor.check():
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(monitor.last_error)},
        )
    return "WORKING"


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(PaginationError)
async def pagination_error_handler(request: Request, exc: PaginationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
    )


@app.exception_handler(RedisError)
async def storage_error_handler(request: Request, exc: RedisError):
    logger.error("storage.error path=%s err=%s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)}
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host="127.0.0.1", port=8100, reload=reload)
