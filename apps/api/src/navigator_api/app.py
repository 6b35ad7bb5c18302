from __future__ import annotations

from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from navigator_api.dependencies import recovered_failures, settings
from navigator_api.errors import ApiError
from navigator_api.middleware import ObservabilityMiddleware
from navigator_api.observability import (
    CompositeRequestMetricsCollector,
    InMemoryRequestMetricsCollector,
    PrometheusRequestMetricsCollector,
)
from navigator_api.response import error_response, success_response
from navigator_api.routers.navigation import router as navigation_router


def create_app() -> FastAPI:
    app = FastAPI(title="Safe Journey Navigator API", version="0.1.0")
    configure_logging(settings.LOG_LEVEL)
    configure_otel(service_name=settings.SERVICE_NAME)
    configure_probe_access_log_filter()
    app.state.request_metrics = InMemoryRequestMetricsCollector()
    app.state.prom_metrics = PrometheusRequestMetricsCollector()
    app.state.composite_metrics = CompositeRequestMetricsCollector(
        [app.state.request_metrics, app.state.prom_metrics]
    )
    app.add_middleware(ObservabilityMiddleware, collector=app.state.composite_metrics)
    app.include_router(navigation_router)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> dict:
        return success_response({"status": "ready"}, meta={})

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = app.state.prom_metrics.render() + recovered_failures.render()
        return Response(content=payload, media_type="text/plain; version=0.0.4")

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_response(exc.code, exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response("VALIDATION_ERROR", message),
        )

    return app


app = create_app()
