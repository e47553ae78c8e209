"""
Purpose:
- One place to configure stdlib logging for the service entry point.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx logs every request at INFO; keep our own lines readable
    logging.getLogger("httpx").setLevel(logging.WARNING)
