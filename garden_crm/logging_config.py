"""
Garden CRM API - Logging
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configura el logger raíz del paquete una sola vez"""
    root = logging.getLogger("garden_crm")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(getattr(h, "_garden_crm", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._garden_crm = True
        root.addHandler(handler)
