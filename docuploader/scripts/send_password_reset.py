"""
Send a password-reset e-mail to a user from the command line (support / ops use).
Links point at HOST_URL. Run from project root:
  python -m docuploader.scripts.send_password_reset EMAIL
Example:
  python -m docuploader.scripts.send_password_reset ada@example.com
"""
import argparse
import sys

from docuploader.core.config import get_settings
from docuploader.core.database import SessionLocal
from docuploader.core.exceptions import EntityNotFoundError
from docuploader.services.context import RequestContext
from docuploader.services.notifications import NotificationDispatcher, build_transport
from docuploader.services.password_reset import request_password_reset


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Send a password-reset e-mail to a user.")
    parser.add_argument("email", help="E-mail of an existing user")
    args = parser.parse_args(argv)

    settings = get_settings()
    dispatcher = NotificationDispatcher(
        build_transport(settings),
        maxsize=settings.NOTIFICATION_QUEUE_SIZE,
    )
    dispatcher.start()
    db = SessionLocal()
    try:
        request_password_reset(
            db,
            args.email.strip(),
            RequestContext.from_settings(settings),
            dispatcher,
        )
        print(f"Password reset e-mail queued for '{args.email.strip()}'.")
        return 0
    except EntityNotFoundError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        # Delivers anything still queued before the process exits.
        dispatcher.stop()


if __name__ == "__main__":
    sys.exit(main())
