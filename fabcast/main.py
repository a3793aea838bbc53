"""Entry: start the API server."""
import logging
import uvicorn

from fabcast.config import API_HOST, API_PORT


def serve(reload: bool = False) -> None:
    uvicorn.run(
        "fabcast.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=reload,
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    serve(reload=True)
