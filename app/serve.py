# app/serve.py
import uvicorn

from app.core.config import settings


def main() -> None:
    """Run the API with uvicorn (WebSocket support comes with uvicorn[standard])."""
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
