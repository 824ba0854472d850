"""Run the API with uvicorn: ``python -m snapdi.presentation.api``."""

import uvicorn

from snapdi.presentation.api.app import create_app
from snapdi_config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
