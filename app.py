import logging
import os
import socket

from csv_explorer.logging_config import configure_logging
from csv_explorer.ui.dash_app import create_dash_app

ENV_CONFIG_ROOT = "CSV_EXPLORER_CONFIG_ROOT"
DEFAULT_PORT = 8051
PORT_SEARCH_SPAN = 100

configure_logging()
logger = logging.getLogger("csv_explorer.app")

app = create_dash_app(os.getenv(ENV_CONFIG_ROOT, "config"))
server = app.server


def port_is_free(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        return s.connect_ex((host, port)) != 0


def pick_port(preferred: int, host: str = "localhost") -> int:
    """First free port in [preferred, preferred + PORT_SEARCH_SPAN), else preferred."""
    for port in range(preferred, preferred + PORT_SEARCH_SPAN):
        if port_is_free(host, port):
            return port
    return preferred


def main() -> None:
    preferred_port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    port = pick_port(preferred_port)
    debug = os.getenv("DEBUG", "0") == "1"

    if port != preferred_port:
        logger.warning("Preferred port taken", extra={"preferred_port": preferred_port, "port": port})

    logger.info("Starting server", extra={"port": port, "debug": debug})
    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()
