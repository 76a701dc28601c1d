import logging
import os
import socket

from wingdisc_browser.ui.dash_app import create_dash_app
from wingdisc_browser.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

app = create_dash_app(os.getenv("WINGDISC_BROWSER_CONFIG_ROOT", "config"))
server = app.server

PORT_SEARCH_SPAN = 100


def find_free_port(start_port: int) -> int:
    for port in range(start_port, start_port + PORT_SEARCH_SPAN):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex(("localhost", port)) != 0:
                return port
    return start_port


def main() -> None:
    preferred_port = int(os.getenv("PORT", "8051"))
    port = find_free_port(preferred_port)
    if port != preferred_port:
        logger.warning("Port taken, using next free one", extra={"requested": preferred_port, "port": port})

    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1")


if __name__ == "__main__":
    main()
