"""
CLI entrypoint for the token retention job. Run from cron, e.g.:

  python -m docuploader.retention

Or hourly: 0 * * * * cd /path/to/docuploader && .venv/bin/python -m docuploader.retention
"""

import logging
import sys

from docuploader.core.config import get_settings
from docuploader.core.database import SessionLocal
from docuploader.services.retention import run_token_retention

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run retention: delete expired or spent tokens."""
    settings = get_settings()
    db = SessionLocal()
    try:
        confirmation_deleted, reset_deleted = run_token_retention(db, settings)
        logger.info(
            "Token retention completed: confirmation_tokens_deleted=%s, password_reset_tokens_deleted=%s",
            confirmation_deleted,
            reset_deleted,
        )
        return 0
    except Exception as e:
        logger.exception("Token retention job failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
