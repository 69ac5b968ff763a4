"""
Centralized logging configuration for the signal scanner.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    # stderr keeps stdout free for the stdout result sink
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s"
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_signal_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for per-symbol signal decisions.

    Events from this logger form the audit trail of every decision the
    aggregator makes.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for signal decisions
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="signals",
        audit_trail=True
    )


def log_signal_decision(
    logger: FilteringBoundLogger,
    symbol: str,
    decision: str,
    confidence: dict[str, float],
    votes: dict[str, str],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a final signal decision with standardized format.

    Args:
        logger: Structlog logger instance
        symbol: Symbol the decision belongs to
        decision: Final decision (Buy, Sell, Neutral)
        confidence: Confidence percentage per outcome
        votes: Recommendation of every voting input, keyed by input name
        context: Additional context data
    """
    bound_logger = logger.bind(
        symbol=symbol,
        decision=decision,
        confidence=confidence,
        votes=votes,
        event_type="signal_decision"
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Signal decided")
