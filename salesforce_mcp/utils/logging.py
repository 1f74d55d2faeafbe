"""Structured logging with correlation IDs for tool-call tracking

stdout carries the MCP stdio transport, so every handler installed here writes
to stderr.
"""
import logging
import json
import sys
import uuid
import contextvars
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Context variable for correlation ID
correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    'correlation_id', default=None
)

_EXTRA_FIELDS = ('tool_name', 'duration_ms', 'success', 'error')


class CorrelationIDFilter(logging.Filter):
    """Add correlation ID to log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or 'no-correlation-id'
        return True


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'correlation_id': getattr(record, 'correlation_id', 'unknown'),
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        return json.dumps(log_data)


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_var.set(correlation_id)


def new_correlation_id() -> str:
    """Generate and set new correlation ID"""
    cid = str(uuid.uuid4())
    correlation_id_var.set(cid)
    return cid


def setup_structured_logging(
    level: str = "INFO",
    use_json: bool = False,
    add_correlation_id: bool = True
) -> None:
    """
    Setup structured logging for the server process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_json: Use JSON formatter for structured logs
        add_correlation_id: Add correlation ID filter
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)

    if use_json:
        formatter = JSONFormatter()
    elif add_correlation_id:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - [%(correlation_id)s] - %(levelname)s - %(message)s'
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    handler.setFormatter(formatter)

    if add_correlation_id:
        handler.addFilter(CorrelationIDFilter())

    root_logger.addHandler(handler)


def log_tool_execution(
    logger: logging.Logger,
    tool_name: str,
    duration_ms: float,
    success: bool,
    error: Optional[str] = None
) -> None:
    """
    Log the outcome of one tool call with structured data.

    Args:
        logger: Logger instance
        tool_name: Name of the tool
        duration_ms: Execution duration in milliseconds
        success: Whether the call produced a non-error envelope
        error: Error text if the call failed
    """
    extra: Dict[str, Any] = {
        'tool_name': tool_name,
        'duration_ms': round(duration_ms, 2),
        'success': success,
    }
    if error:
        extra['error'] = error

    message = f"Tool '{tool_name}' {'succeeded' if success else 'failed'} in {duration_ms:.2f}ms"

    if success:
        logger.info(message, extra=extra)
    else:
        logger.warning(message, extra=extra)
