"""FastAPI ASGI application entrypoint."""

import uvicorn

from .core.app_factory import create_application

app = create_application()


def run() -> None:
    settings = app.state.settings  # type: ignore[attr-defined]
    uvicorn.run(app, host=settings.host, port=settings.port)


__all__ = ("app", "run")
