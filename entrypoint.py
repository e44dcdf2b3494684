"""Server entrypoint. Runs the banking API under uvicorn with host/port from settings."""
import uvicorn

from banking.config.settings import get_settings
from banking.main import app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        app,
        host=settings.app_host,
        port=settings.app_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
