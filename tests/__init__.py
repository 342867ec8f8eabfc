"""Test package. Configure an in-memory database before any docuploader module loads settings."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MAIL_ENABLED"] = "false"
os.environ["HOST_URL"] = "http://frontend.test"
os.environ["TOKEN_RETENTION_ENABLED"] = "true"
