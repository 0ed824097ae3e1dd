# app/main.py
from fastapi import FastAPI

from app.api.routes import feedback, health, meetings
from app.api.routes.health import APP_VERSION
from app.core.config import get_settings
from app.core.logging_config import configure_logging


def create_app() -> FastAPI:
    """
    Application factory for the Meeting Usefulness service.
    """
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Scores meetings for usefulness, evaluates whole calendars, and turns\n"
            "post-meeting survey feedback of recurring meetings into prioritized\n"
            "improvement suggestions."
        ),
        version=APP_VERSION,
    )

    # Routers
    app.include_router(health.router)
    app.include_router(meetings.router)
    app.include_router(feedback.router)

    return app


app = create_app()
