"""
Structured logging utility for the FastSpring checkout sheet.
Provides structured logs tagged with the active checkout session id.
"""
import uuid
import logging
import structlog
from contextvars import ContextVar
from typing import Any, Dict, Optional

from fscheckout.config import config

# Context variable for the checkout session id
session_id_var: ContextVar[str] = ContextVar("session_id", default="")


def get_session_id() -> str:
    """Get current session id or generate a new one."""
    session_id = session_id_var.get()
    if not session_id:
        session_id = str(uuid.uuid4())[:8]
        session_id_var.set(session_id)
    return session_id


def set_session_id(session_id: Optional[str] = None) -> str:
    """Set a new session id for the current context."""
    new_session_id = session_id or str(uuid.uuid4())[:8]
    session_id_var.set(new_session_id)
    return new_session_id


def add_session_id(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Processor to add the session id to log entries that don't carry one."""
    event_dict.setdefault("session_id", get_session_id())
    return event_dict


def configure_logging():
    """Configure structlog with appropriate processors."""
    processors = [
        structlog.contextvars.merge_contextvars,
        add_session_id,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if config.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.LOG_LEVEL.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)


class ComponentLogger:
    """
    Specialized logger for the checkout components.
    Ensures consistent logging format across builder, parser,
    controller and surfaces.
    """

    def __init__(self, component: str):
        self.component = component
        self.logger = get_logger(component)

    def log_decision(
        self,
        decision: str,
        reason: str,
        **extra
    ):
        """Log a decision made by this component."""
        self.logger.info(
            "decision_made",
            component=self.component,
            decision=decision,
            reason=reason,
            **extra
        )

    def log_action(
        self,
        action: str,
        status: str = "started",
        **extra
    ):
        """Log an action being performed."""
        self.logger.info(
            f"action_{status}",
            component=self.component,
            action=action,
            **extra
        )

    def log_error(
        self,
        error: str,
        error_type: str = "unknown",
        **extra
    ):
        """Log an error with full context."""
        self.logger.error(
            "error_occurred",
            component=self.component,
            error=error,
            error_type=error_type,
            **extra
        )

    def log_message(
        self,
        channel: str,
        payload: Any,
        **extra
    ):
        """Log a message crossing the content/host boundary."""
        self.logger.debug(
            "channel_message",
            component=self.component,
            channel=channel,
            payload_type=type(payload).__name__,
            payload_length=len(payload) if isinstance(payload, str) else None,
            **extra
        )

    def log_delivery(
        self,
        outcome: str,
        record_count: int = 0,
        callback_released: bool = False,
        **extra
    ):
        """Log a result handed to the caller's callback."""
        self.logger.info(
            "result_delivered",
            component=self.component,
            outcome=outcome,
            record_count=record_count,
            callback_released=callback_released,
            **extra
        )


# Initialize logging on module import
configure_logging()
