"""
bootstrap/ - Bootstrap Layer

Configuration, page session composition and the command line entry point.
"""

from .config import (
    FleetViewConfig,
    ServiceConfig,
    UIConfig,
    LoggingConfig,
    load_config,
    get_config,
)

from .app import (
    SessionState,
    PageSession,
    build_service,
)

from .entrypoints import (
    setup_logging,
    run_session,
    cli_main,
    main,
)

__all__ = [
    "FleetViewConfig",
    "ServiceConfig",
    "UIConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "SessionState",
    "PageSession",
    "build_service",
    "setup_logging",
    "run_session",
    "cli_main",
    "main",
]
