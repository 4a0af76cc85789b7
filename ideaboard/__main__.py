"""Run the API with uvicorn: ``python -m ideaboard``."""

import logging

import uvicorn

from ideaboard.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("ideaboard.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
