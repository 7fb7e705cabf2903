"""
Logging configuration.

Store events are logged, but phrase words never are.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Set


ENV_LOG_LEVEL = "SEED_LOG_LEVEL"


class PhraseRedactionFilter(logging.Filter):
    """Replace records that look like they carry a sensitive assignment."""

    SENSITIVE_KEYS: Set[str] = {
        "words",
        "phrase",
        "key",
        "token",
        "secret",
    }

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            text = record.getMessage()
        except Exception:
            text = str(record.msg)
        lowered = text.lower()
        for key in self.SENSITIVE_KEYS:
            if f"{key}=" in lowered:
                record.msg = "[REDACTED - sensitive data filtered]"
                record.args = ()
                break
        return True


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the process."""
    name = (level or os.environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    handler.addFilter(PhraseRedactionFilter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, name, logging.INFO))

    # Clear existing handlers to avoid duplicates
    root.handlers = []
    root.addHandler(handler)

    # Reduce noise from the HTTP stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
