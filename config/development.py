import os

from .config import Config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()
MAIL_CONFIG = Config.mail_config()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

MAILBOX_BACKEND = Config.MAILBOX_BACKEND
MAILBOX_TTL_SECONDS = Config.MAILBOX_TTL_SECONDS
DEFAULT_GRACE_MINUTES = Config.DEFAULT_GRACE_MINUTES
DEFAULT_EARLY_LEAVE_MINUTES = Config.DEFAULT_EARLY_LEAVE_MINUTES

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
