"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meeting_admin.api.contacts import router as contacts_router
from meeting_admin.api.export import router as export_router
from meeting_admin.api.meetings import router as meetings_router
from meeting_admin.api.photos import router as photos_router
from meeting_admin.app_logging import configure_logging
from meeting_admin.containers import AppContainer
from meeting_admin.domain.errors import InvalidInputError, StorageError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI(title="Meeting Admin")
    app.state.container = container

    app.include_router(meetings_router)
    app.include_router(contacts_router)
    app.include_router(photos_router)
    app.include_router(export_router)

    @app.exception_handler(InvalidInputError)
    async def invalid_input(_request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.exception_handler(StorageError)
    async def storage_failure(_request: Request, exc: StorageError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
