import os


def _env_bool(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


def _env_optional_int(name: str):
    value = os.environ.get(name, "").strip()
    return int(value) if value else None


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    # Database
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "rfid_attendance")

    # Scan policy defaults, used when a tenant row leaves the column NULL
    DEFAULT_GRACE_MINUTES = int(os.environ.get("DEFAULT_GRACE_MINUTES", "0"))
    DEFAULT_EARLY_LEAVE_MINUTES = _env_optional_int("DEFAULT_EARLY_LEAVE_MINUTES")

    # Device mailbox: 'memory' for a single instance, 'mysql' when scaled out
    MAILBOX_BACKEND = os.environ.get("MAILBOX_BACKEND", "memory")
    MAILBOX_TTL_SECONDS = int(os.environ.get("MAILBOX_TTL_SECONDS", "300"))

    # Outbound mail for cross-tenant alerts; empty host logs alerts instead
    MAIL_HOST = os.environ.get("MAIL_HOST", "")
    MAIL_PORT = int(os.environ.get("MAIL_PORT", "587"))
    MAIL_USER = os.environ.get("MAIL_USER", "")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD", "")
    MAIL_SENDER = os.environ.get("MAIL_SENDER", "")
    MAIL_USE_TLS = _env_bool("MAIL_USE_TLS", "1")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    AUTO_INIT_DB = _env_bool("AUTO_INIT_DB")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }

    @classmethod
    def mail_config(cls) -> dict:
        return {
            "host": cls.MAIL_HOST,
            "port": cls.MAIL_PORT,
            "user": cls.MAIL_USER,
            "password": cls.MAIL_PASSWORD,
            "sender": cls.MAIL_SENDER,
            "use_tls": cls.MAIL_USE_TLS,
        }
