"""API route registration."""

from fastapi import FastAPI

from grso_pos.api.routes import (
    backup,
    cart,
    inventory,
    products,
    reports,
    system,
    transactions,
    users,
)


def include_api_routes(app: FastAPI) -> None:
    """Attach all API routers to the application."""

    app.include_router(system.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(inventory.router)
    app.include_router(cart.router)
    app.include_router(transactions.router)
    app.include_router(reports.router)
    app.include_router(backup.router)
