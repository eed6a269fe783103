from .config import Config

SECRET_KEY = "test-secret"
DB_CONFIG = Config.db_config()
MAIL_CONFIG = {"host": ""}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

MAILBOX_BACKEND = "memory"
MAILBOX_TTL_SECONDS = 300
DEFAULT_GRACE_MINUTES = 0
DEFAULT_EARLY_LEAVE_MINUTES = None

AUTO_INIT_DB = False
