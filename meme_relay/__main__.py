"""
Purpose:
- `python -m meme_relay` / `meme-relay`: validate config, then serve with Uvicorn.
- Bad or missing configuration exits non-zero before the port is bound.
"""

import logging
import sys
import uvicorn
from pydantic import ValidationError
from .core.logconfig import configure_logging
from .core.settings import get_settings
from .main import create_app

logger = logging.getLogger(__name__)

def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging()
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())

if __name__ == "__main__":
    main()
