import logging

import uvicorn

from .config import Settings
from .main import create_app


def main() -> None:
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    host = "0.0.0.0" if settings.external_url else settings.host
    uvicorn.run(create_app(settings), host=host, port=settings.port)


if __name__ == "__main__":
    main()
