import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()
MAIL_CONFIG = Config.mail_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

# Production usually runs several workers, so share the mailbox through MySQL.
MAILBOX_BACKEND = os.getenv("MAILBOX_BACKEND", "mysql")
MAILBOX_TTL_SECONDS = Config.MAILBOX_TTL_SECONDS
DEFAULT_GRACE_MINUTES = Config.DEFAULT_GRACE_MINUTES
DEFAULT_EARLY_LEAVE_MINUTES = Config.DEFAULT_EARLY_LEAVE_MINUTES

AUTO_INIT_DB = Config.AUTO_INIT_DB
