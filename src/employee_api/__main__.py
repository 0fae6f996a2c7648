"""Run the service with uvicorn: ``python -m employee_api``."""

import uvicorn

from employee_api.config import get_settings


def main() -> None:
    """Start the HTTP server using host, port and log level from settings."""
    settings = get_settings()
    uvicorn.run(
        "employee_api.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
