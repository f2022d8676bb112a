"""
Logfire monitoring for the Glimmer server.

``initialize_logfire`` configures Pydantic Logfire once at startup and turns
on the integrations the server uses: pydantic-ai calls, SQLAlchemy queries,
outgoing httpx requests and the FastAPI routes. The ``log_*`` helpers record
AI calls, API requests, WebSocket relay events and errors.

Nothing is sent unless ``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is
set; until then every helper returns immediately.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import logfire
from fastapi import FastAPI
from logfire import SamplingOptions

logger = logging.getLogger(__name__)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class LogfireOptions:
    """Logfire settings, read from ``LOGFIRE_*`` environment variables."""

    enabled: bool = False
    token: str = ""
    project_name: str = "glimmer"
    environment: str = "development"
    service_name: str = "glimmer-server"
    service_version: str = "1.0.0"
    head_sample_rate: float = 1.0
    tail_sample_rate: float = 1.0
    # Integrations switched off with LOGFIRE_TRACE_<NAME>=false
    disabled: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(cls) -> "LogfireOptions":
        return cls(
            enabled=_flag("LOGFIRE_ENABLED", "false"),
            token=os.getenv("LOGFIRE_TOKEN", ""),
            project_name=os.getenv("LOGFIRE_PROJECT_NAME", "glimmer"),
            environment=os.getenv("LOGFIRE_ENVIRONMENT", "development"),
            service_name=os.getenv("LOGFIRE_SERVICE_NAME", "glimmer-server"),
            service_version=os.getenv("LOGFIRE_SERVICE_VERSION", "1.0.0"),
            head_sample_rate=float(os.getenv("LOGFIRE_SAMPLE_RATE", "1.0")),
            tail_sample_rate=float(os.getenv("LOGFIRE_TRACE_SAMPLE_RATE", "1.0")),
            disabled=tuple(
                name for name in INSTRUMENTATION_NAMES if not _flag(f"LOGFIRE_TRACE_{name.upper()}", "true")
            ),
        )


INSTRUMENTATION_NAMES = ("pydantic_ai", "sqlalchemy", "httpx", "fastapi")

_logfire_configured = False


def is_logfire_configured() -> bool:
    return _logfire_configured


def _instrumentations(app: Optional[FastAPI]) -> List[Tuple[str, Callable[[], Any]]]:
    steps: List[Tuple[str, Callable[[], Any]]] = [
        ("pydantic_ai", logfire.instrument_pydantic_ai),
        ("sqlalchemy", logfire.instrument_sqlalchemy),
        ("httpx", logfire.instrument_httpx),
    ]
    if app is not None:
        steps.append(("fastapi", lambda: logfire.instrument_fastapi(app=app)))
    return steps


def initialize_logfire(app: Optional[FastAPI] = None, options: Optional[LogfireOptions] = None) -> bool:
    """
    Configure Logfire and instrument the server's libraries.

    Args:
        app: The FastAPI application to trace; without it routes are not instrumented.
        options: Use these instead of the environment.

    Returns:
        True when Logfire is configured and collecting.
    """
    global _logfire_configured

    options = options or LogfireOptions.from_env()
    if not options.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False
    if not options.token:
        logger.warning("LOGFIRE_ENABLED is set but LOGFIRE_TOKEN is empty; monitoring stays off.")
        return False

    try:
        logfire.configure(
            token=options.token,
            service_name=options.service_name,
            service_version=options.service_version,
            environment=options.environment,
            sampling=SamplingOptions(head=options.head_sample_rate, tail=options.tail_sample_rate),
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False
    _logfire_configured = True

    for name, instrument in _instrumentations(app):
        if name in options.disabled:
            continue
        try:
            instrument()
            logger.info(f"Logfire: {name} instrumentation enabled")
        except Exception as e:
            # An integration whose library is missing or misconfigured must not stop the server
            logger.warning(f"Failed to instrument {name}: {e}")

    logger.info(
        f"Logfire monitoring initialized: project={options.project_name}, "
        f"environment={options.environment}, service={options.service_name}"
    )
    return True


def _emit(level: str, message: str, attributes: Dict[str, Any]) -> None:
    if not _logfire_configured:
        return
    try:
        getattr(logfire, level)(message, **attributes)
    except Exception:
        logger.debug(f"Could not send '{message}' to Logfire")


def log_ai_call(provider: str, model: str, duration_ms: float, success: bool) -> None:
    """Record one text-generation call (provider, model, latency, outcome)."""
    _emit(
        "info",
        "AI call completed",
        {"provider": provider, "model": model, "duration_ms": duration_ms, "success": success},
    )


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Record one HTTP request with its status and duration."""
    _emit(
        "info",
        "API request completed",
        {"method": method, "path": path, "status_code": status_code, "duration_ms": duration_ms},
    )


def log_realtime_event(event: str, user_id: Optional[str] = None, **attributes: Any) -> None:
    """
    Record a WebSocket relay event.

    Args:
        event: Short event name (``connected``, ``authenticated``, a message type)
        user_id: User bound to the socket, if any
        attributes: Extra attributes stored on the event
    """
    _emit("info", "Realtime event {event}", {"event": event, "user_id": user_id, **attributes})


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """Record an error with optional context attributes."""
    _emit(
        "error",
        "{error_type}: {error_message}",
        {"error_type": error_type, "error_message": error_message, **(context or {})},
    )
