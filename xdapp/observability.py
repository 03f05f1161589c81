"""
Observability module: Prometheus metrics and structured JSON logging.

- Reconciliation metrics (Counters, Histogram)
- JSON structured logging via python-json-logger
- Masking of credentials in log messages
"""

import logging
import re
import sys

from prometheus_client import Counter, Histogram

# =============================================================================
# Prometheus Custom Metrics
# =============================================================================

RECONCILE_ACTIONS = Counter(
    "xdapp_reconcile_actions_total",
    "Number of reconcile actions applied to the broker",
    ["action"],
)

DRIFT_DETECTED = Counter(
    "xdapp_drift_detected_total",
    "Number of property mismatches found while testing desired state",
    ["property"],
)

IMMUTABLE_VIOLATIONS = Counter(
    "xdapp_immutable_violations_total",
    "Number of attempts to change an immutable property",
    ["property"],
)

REMOTE_OPERATION_DURATION = Histogram(
    "xdapp_remote_operation_duration_seconds",
    "Latency of remote units of work against the broker",
    ["operation"],
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
)


# =============================================================================
# Sensitive data filtering
# =============================================================================

class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages."""

    SENSITIVE_PATTERNS = [
        (re.compile(r'password["\']?\s*[:=]\s*["\']?[^"\'}\s]+', re.I), 'password=***'),
        (re.compile(r'token["\']?\s*[:=]\s*["\']?[^"\'}\s]+', re.I), 'token=***'),
        (re.compile(r'secret["\']?\s*[:=]\s*["\']?[^"\'}\s]+', re.I), 'secret=***'),
        (re.compile(r'api[_-]?key["\']?\s*[:=]\s*["\']?[^"\'}\s]+', re.I), 'api_key=***'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            for pattern, replacement in self.SENSITIVE_PATTERNS:
                record.msg = pattern.sub(replacement, record.msg)
        return True


# =============================================================================
# Logging setup
# =============================================================================

def setup_json_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with JSON structured output.

    Uses python-json-logger's JsonFormatter. The SensitiveDataFilter
    is attached to the handler so every record is masked before formatting.
    """
    from pythonjsonlogger.json import JsonFormatter

    handler = logging.StreamHandler(sys.stderr)
    formatter = JsonFormatter(
        fmt="%(timestamp)s %(name)s %(levelname)s %(message)s",
        rename_fields={"levelname": "level", "asctime": "timestamp"},
        timestamp=True,
    )
    handler.setFormatter(formatter)
    handler.addFilter(SensitiveDataFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())


def setup_plain_logging(level: str = "INFO") -> None:
    """Configure the root logger with human-readable output."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler.addFilter(SensitiveDataFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
