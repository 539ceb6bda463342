from __future__ import annotations

import logging
from typing import Any, Dict


SENSITIVE_KEYS = {"password", "token", "secret", "key", "authorization", "dsn"}

NOISY_LOGGERS = ("botocore", "boto3", "urllib3")


def redact_sensitive(data: Dict[str, Any]) -> Dict[str, Any]:
    redacted: Dict[str, Any] = {}
    for k, v in data.items():
        lower = k.lower()
        if any(s in lower for s in SENSITIVE_KEYS):
            redacted[k] = "***redacted***" if v else v
        else:
            redacted[k] = v
    return redacted


def configure_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
