from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.routes import health
from app.core.config import settings
from app.core.logging import bind_request_context, configure_logging, get_logger
from app.core.monitoring import configure_error_monitoring
from app.core.observability import configure_observability
from app.domains.employees.router import router as employee_router
from app.domains.payments.router import router as payments_router
from app.domains.reporting.router import router as reporting_router
from app.domains.work_days.router import router as work_days_router

configure_logging(settings.log_level)
configure_observability()
configure_error_monitoring()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.cors_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)


@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = bind_request_context(request.method, request.url.path, request.headers.get("x-request-id"))
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


app.include_router(health.router)
app.include_router(employee_router)
app.include_router(work_days_router)
app.include_router(payments_router)
app.include_router(reporting_router)


@app.on_event("startup")
def startup_event() -> None:
    logger.info("startup_complete", env=settings.env)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "My Days API running", "environment": settings.env}
