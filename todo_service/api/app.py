import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_service.adapter.services.token_cleanup_worker import TokenCleanupWorker
from todo_service.adapter.services.unit_of_work import CollectionUnitOfWork
from todo_service.app.services.collection_store import CollectionStore
from todo_service.app.services.email_sender import IEmailSender
from todo_service.depends import (
    create_collection_store,
    create_email_sender,
    create_reset_token_codec,
)
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred. Please try again."


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content=error_dict)


async def handle_server_error(request: Request, exc: ServerError):
    message = exc.base_error.message if exc.expose_message else GENERIC_ERROR_MESSAGE
    error_dict = {"code": exc.base_error.code, "message": message}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_dict
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.warning(f"Malformed request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"code": "VALIDATION_ERROR", "message": "Invalid request body"},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "INTERNAL_ERROR", "message": GENERIC_ERROR_MESSAGE},
    )


def create_app(
    ApplicationConfig,
    collection_store: Optional[CollectionStore] = None,
    email_sender: Optional[IEmailSender] = None,
) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    store = collection_store or create_collection_store(ApplicationConfig)
    cleanup_worker = TokenCleanupWorker(
        lambda: CollectionUnitOfWork(store),
        interval_seconds=ApplicationConfig.CLEANUP_INTERVAL_SECONDS,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cleanup_worker.start()
        try:
            yield
        finally:
            await cleanup_worker.stop()

    app = FastAPI(title="Todo Service API", version="0.1.0", lifespan=lifespan)

    app.state.config = ApplicationConfig
    app.state.collection_store = store
    app.state.email_sender = email_sender or create_email_sender(ApplicationConfig)
    app.state.reset_token_codec = create_reset_token_codec(ApplicationConfig)
    app.state.cleanup_worker = cleanup_worker

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from todo_service.api.routes import auth, health_check, todos

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX, tags=["Authentication"])
    app.include_router(todos.router, prefix=ApplicationConfig.API_PREFIX, tags=["Todos"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
