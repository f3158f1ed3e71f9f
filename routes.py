from fastapi import FastAPI
from controller.function_controller import function_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(function_router)
