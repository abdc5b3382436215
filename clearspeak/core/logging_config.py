import logging
import sys
from typing import Optional

from clearspeak.core.config import get_settings


_configured = False


def configure_logging(level_override: Optional[str] = None) -> None:
    """
    Configure process-wide logging for the service.

    This is idempotent and safe to call multiple times.
    """
    global _configured

    if _configured:
        return

    log_level = (level_override or get_settings().log_level).upper()

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )

    # Vendor SDKs log every HTTP request through httpx.
    for noisy_logger in ("uvicorn", "uvicorn.access", "httpx"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    _configured = True
