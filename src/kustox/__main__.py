"""Run the KustoX API with uvicorn: ``python -m kustox``."""

import uvicorn

from kustox.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "kustox.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
        log_level=settings.app_log_level.lower(),
    )


if __name__ == "__main__":
    main()
