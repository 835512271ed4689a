"""Entry: start the API server."""
import logging
import uvicorn

from jukey.config import API_HOST, API_PORT, LOG_LEVEL


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s: %(message)s")
    # One worker only: the queue lives in process memory
    uvicorn.run(
        "jukey.api.app:app",
        host=API_HOST,
        port=API_PORT,
    )


if __name__ == "__main__":
    main()
