"""Entry point for running the application with uvicorn."""

import uvicorn

from award_payroll.config import configure_logging, settings


def main() -> None:
    """Run the API server."""
    configure_logging()
    uvicorn.run(
        "award_payroll.api.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
