import re
from datetime import datetime, timezone

REDACTED = "[REDACTED]"
ACCESS_KEY_RE = re.compile(r"(access_key=)[^&\s]+")
SECRET_FIELDS = {"access_key", "MEDIASTACK_ACCESS_KEY"}

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def redact_url(url: str) -> str:
    return ACCESS_KEY_RE.sub(rf"\g<1>{REDACTED}", url)

def redact_secrets(_, __, event_dict: dict) -> dict:
    """structlog processor: never let the API credential reach a log sink"""
    for key, val in list(event_dict.items()):
        if key in SECRET_FIELDS:
            event_dict[key] = REDACTED
        elif isinstance(val, str) and "access_key=" in val:
            event_dict[key] = redact_url(val)
        elif isinstance(val, dict) and SECRET_FIELDS & val.keys():
            event_dict[key] = {k: (REDACTED if k in SECRET_FIELDS else v) for k, v in val.items()}
    return event_dict
