import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import LOG_LEVEL, UPLOAD_DIR
from app.core.errors import WorkflowError
from app.core.logging_middleware import RequestLoggingMiddleware
from app.db.init_db import init_db
from app.routers.assignments import router as assignments_router
from app.routers.auth import router as auth_router
from app.routers.classrooms import router as classrooms_router
from app.routers.late_requests import router as late_requests_router
from app.routers.submissions import router as submissions_router
from app.routers.teacher_dashboard import router as teacher_dashboard_router
from app.routers.uploads import router as uploads_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Tuition Center")

# Middleware
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    logger.warning(
        "%s %s rejected: %s (%s)",
        request.method,
        request.url.path,
        exc.kind,
        exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind},
    )


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()
    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(classrooms_router, prefix="/classrooms", tags=["classrooms"])
app.include_router(assignments_router, tags=["assignments"])
app.include_router(submissions_router, tags=["submissions"])
app.include_router(late_requests_router, tags=["late-requests"])
app.include_router(uploads_router, prefix="/uploads", tags=["uploads"])

# Teacher dashboard (no prefix, the route defines its full path)
app.include_router(teacher_dashboard_router)

app.mount("/files", StaticFiles(directory=UPLOAD_DIR, check_dir=False), name="files")
