import logging
import re
import sys

# One domain per area of the cafeteria API; %(domain)s in the format below.
DOMAIN_AUTH = "auth"
DOMAIN_STUDENTS = "students"
DOMAIN_STAFF = "staff"
DOMAIN_MENU = "menu"
DOMAIN_STORAGE = "storage"
DOMAINS = frozenset({DOMAIN_AUTH, DOMAIN_STUDENTS, DOMAIN_STAFF, DOMAIN_MENU, DOMAIN_STORAGE})

LOG_FORMAT = "%(asctime)s | %(levelname)s | [%(domain)s] | %(name)s | %(message)s"

# Token class, request path and FailureKind value. Never the token itself.
AUTH_REJECTION_FORMAT = "auth rejected | class=%s path=%s reason=%s"


def get_domain_logger(name: str, domain: str) -> logging.LoggerAdapter[logging.Logger]:
    """Return a logger that stamps ``domain`` on every record."""
    if domain not in DOMAINS:
        raise ValueError(f"unknown log domain: {domain}")
    return logging.LoggerAdapter(logging.getLogger(name), {"domain": domain})


def log_auth_rejection(
    logger: logging.LoggerAdapter[logging.Logger],
    token_class: str,
    path: str,
    reason: str,
) -> None:
    logger.info(AUTH_REJECTION_FORMAT, token_class, path, reason)


class DomainDefaultFilter(logging.Filter):
    """Records from third-party loggers carry no domain; label them ``app``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "domain"):
            record.domain = "app"  # type: ignore[attr-defined]
        return True


# Access tokens, signing keys and passwords; nothing else in this API is secret.
_SECRET_PATTERNS = [
    re.compile(r"(?i)(x-access-token\s*[=:]\s*)([^\s,;]+)"),
    re.compile(r"(?i)(authorization\s*[=:]\s*bearer\s+)([^\s,;]+)"),
    re.compile(r"(?i)((?:student|admin)_token_key\s*[=:]\s*)([^\s,;]+)"),
    re.compile(r"(?i)(token\s*[=:]\s*)([^\s,;]+)"),
    re.compile(r"(?i)(password\s*[=:]\s*)([^\s,;]+)"),
]


def redact_secrets(message: str) -> str:
    text = str(message or "")
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r"\1[REDACTED]", text)
    return text


class SecretRedactionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_secrets(record.getMessage())
        record.args = ()
        return True


class SuppressHealthCheckFilter(logging.Filter):
    """Drop successful access-log lines for the health endpoint."""

    def __init__(self, path: str = "/health") -> None:
        super().__init__()
        self.path = path

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return not (f" {self.path} " in msg and " 200" in msg)


def configure_logging(level: str = "INFO", *, health_path: str = "/health") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(DomainDefaultFilter())
        handler.addFilter(SecretRedactionFilter())
    # SQL echo and hash-scheme chatter stay off unless explicitly requested.
    for noisy in ("sqlalchemy.engine", "passlib", "aiosqlite"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").addFilter(SuppressHealthCheckFilter(health_path))
