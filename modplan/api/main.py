from __future__ import annotations

from fastapi import FastAPI

from modplan.api.endpoints import health
from modplan.api.endpoints import metrics_export
from modplan.api.endpoints.modules import router as modules_router
from modplan.api.endpoints.plans import router as plans_router

from modplan.api.middleware.error_shaping import SafeErrorMiddleware, domain_error_handler
from modplan.api.middleware.request_context import RequestContextMiddleware
from modplan.core.errors import ConfigError, ResolveError


app = FastAPI(
    title="Module Planner API",
    version="0.1.0",
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST.
#   SafeErrorMiddleware -> RequestContextMiddleware -> handler
# ------------------------------------------------------------
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SafeErrorMiddleware)

# Domain errors are shaped inside the stack so request metrics still see them.
app.add_exception_handler(ConfigError, domain_error_handler)
app.add_exception_handler(ResolveError, domain_error_handler)


app.include_router(health.router)
app.include_router(metrics_export.router)
app.include_router(modules_router)
app.include_router(plans_router)


@app.get("/health")
def health_check():
    return {"status": "healthy"}
