from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from warehouse.api.routes import advisory_router, dashboard_router, inventory_router, order_router

__all__ = ["advisory_router", "dashboard_router", "inventory_router", "order_router", "include_api"]


async def validation_error_handler(_request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.messages})


def include_api(app: FastAPI) -> None:
    """Mount every warehouse router and map domain validation errors to 422."""
    app.include_router(inventory_router)
    app.include_router(order_router)
    app.include_router(advisory_router)
    app.include_router(dashboard_router)
    app.add_exception_handler(ValidationError, validation_error_handler)
