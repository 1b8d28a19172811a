from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from grantflow import __version__
from grantflow.common.logger import setup_logger
from grantflow.core.catalog import get_workflow_config
from grantflow.core.config import get_settings
from grantflow.core.errors import UnknownPermission
from grantflow.api.routers import health, catalog, approvals, requests

settings = get_settings()

setup_logger(
    log_dir=settings.log_dir,
    level=settings.log_level,
    file_logging=settings.file_logging,
)

# Fail startup on a bad catalog/policy rather than on the first request
get_workflow_config()

app = FastAPI(
    title=settings.app_name,
    description="Approval workflow engine for access-permission grants",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnknownPermission)
async def unknown_permission_handler(request: Request, exc: UnknownPermission):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "permission": exc.permission},
    )


app.include_router(health.router)
app.include_router(catalog.router, prefix="/api")
app.include_router(approvals.router, prefix="/api")
app.include_router(requests.router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs" if settings.debug else None,
    }
