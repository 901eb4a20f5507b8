from shared.infrastructure.observability.logger import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = ["configure_logging", "get_logger", "bind_context", "clear_context"]
