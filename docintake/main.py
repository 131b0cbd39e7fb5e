"""Application entry point for the document intake API server."""

import uvicorn

from docintake.api.app import app
from docintake.utils.config import load_config
from docintake.utils.logger import setup_logging


def main() -> None:
    """Start the FastAPI application server."""
    config = load_config()
    setup_logging(config.log_level, config.log_file)
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
