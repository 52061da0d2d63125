import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """
    Configure le logger racine une seule fois (appels suivants: niveau seulement).
    """
    global _configured
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)

    if not _configured:
        logging.basicConfig(level=lvl, format=LOG_FORMAT)
        _configured = True

    logging.getLogger().setLevel(lvl)


def mask_key(key: str | None) -> str:
    """Ne jamais logger une clé de licence en clair."""
    if not key:
        return "<empty>"
    return f"***{key[-4:]}" if len(key) > 4 else "***"
