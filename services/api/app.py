"""
FastAPI application factory for the admin report API.

Stores are owned by the caller: create_app only routes requests to the
reporting domains it is given.

Usage:
    from services.api.app import create_app

    app = create_app(build_domains())
"""

import logging
import re

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from apps.domains import ReportingDomain
from utils.config import settings
from utils.errors import ReportError

logger = logging.getLogger(__name__)

REPORT_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


class AppError(Exception):
    """Handler failure answered with a plain-text message."""

    def __init__(self, message: str, code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


def parse_report_id(raw: str) -> int:
    """
    Parse a signed decimal 64-bit report id.

    Accepts an optional sign followed by ASCII digits and nothing else.
    """
    if not REPORT_ID_PATTERN.fullmatch(raw):
        raise ValueError(f"invalid report id {raw!r}")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"report id {raw!r} out of range")
    return value


def build_router(domain: ReportingDomain) -> APIRouter:
    """Create the generate and get-by-id routes for one reporting domain."""
    router = APIRouter(prefix=f"/admin/{domain.name}/reports", tags=[domain.name])

    @router.get("")
    def create_report() -> RedirectResponse:
        try:
            report = domain.generate()
        except ReportError as e:
            raise AppError(f"could not generate {domain.name} report: {e}") from e

        try:
            report_id = domain.store.add(report)
        except ReportError as e:
            raise AppError(f"could not add report to db: {e}") from e

        return RedirectResponse(url=f"/admin/{domain.name}/reports/{report_id}", status_code=302)

    @router.get("/{report_id}")
    def get_report(report_id: str):
        try:
            parsed_id = parse_report_id(report_id)
        except ValueError as e:
            raise AppError(f"could not parse reportId from request: {e}") from e

        try:
            return domain.store.get(parsed_id)
        except ReportError as e:
            raise AppError(f"could not get report: {e}") from e

    return router


def create_app(domains: dict[str, ReportingDomain]) -> FastAPI:
    """
    Build the API for the given reporting domains.

    Args:
        domains: Reporting domains keyed by name; each gets /admin/{name}/reports routes

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

    @app.middleware("http")
    async def allow_any_origin(request: Request, call_next):
        response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET"
        return response

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> PlainTextResponse:
        logger.error(
            "Handler error: status code: %d, message: %s, underlying err: %r",
            exc.code, exc.message, exc.__cause__,
        )
        return PlainTextResponse(exc.message, status_code=exc.code)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    for domain in domains.values():
        app.include_router(build_router(domain))

    return app
