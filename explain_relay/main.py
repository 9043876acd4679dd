"""
Explain Code Relay - entry point.

Loads settings once, builds the app and serves it with uvicorn. Refuses to
start when the configuration is invalid or no upstream API key is set.
"""
import logging
import sys

from pydantic import ValidationError

from explain_relay.app import create_app
from explain_relay.config.logging import configure_logging
from explain_relay.config.settings import get_settings
from explain_relay.exceptions import ConfigurationError

try:
    settings = get_settings()
except ValidationError as e:
    configure_logging()
    logging.critical(f"Invalid configuration: {e}")
    sys.exit(1)

configure_logging(settings.log_level)

try:
    app = create_app(settings)
except ConfigurationError as e:
    logging.critical(str(e))
    sys.exit(1)

logging.info(f"API Key Loaded: {settings.has_api_key}")


def run() -> None:
    import uvicorn

    logging.info(f"Server running at http://localhost:{settings.port}")
    logging.info(f"Health: http://localhost:{settings.port}/api/health")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
