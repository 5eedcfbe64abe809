"""Run the application with uvicorn: ``python -m shorturls``."""

import uvicorn

from shorturls.core.config import settings


def main():
    uvicorn.run(
        "shorturls.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
