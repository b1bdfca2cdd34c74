"""Run the API with uvicorn: ``python -m recipe_api``."""

import uvicorn

from recipe_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "recipe_api.main:create_application",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
