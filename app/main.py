# app/main.py
from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.api.assignments import router as assignments_router
from app.api.health import router as health_router
from app.api.notifications import router as notifications_router
from app.api.users import router as users_router
from app.core.config import settings
from app.core.logging_setup import configure_logging

configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    description=settings.api_description,
    debug=settings.debug,
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # Headers-only auth context: document the actor header via an apiKey scheme.
    schema.setdefault("components", {}).setdefault("securitySchemes", {})
    schema["components"]["securitySchemes"]["XActorUserId"] = {
        "type": "apiKey",
        "in": "header",
        "name": "X-Actor-User-Id",
        "description": "Acting user id (integer). Required for protected endpoints.",
    }
    schema["security"] = [{"XActorUserId": []}]

    # Public endpoints: remove security requirement explicitly.
    for path in ["/health"]:
        if path in schema.get("paths", {}):
            for _method, op in schema["paths"][path].items():
                if isinstance(op, dict):
                    op["security"] = []

    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi

app.include_router(health_router, tags=["health"])
app.include_router(assignments_router)
app.include_router(users_router)
app.include_router(notifications_router)
