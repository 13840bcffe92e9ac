"""
Command registration and the error boundary

Every registered command returns a CommandResponse; exceptions raised below
are converted to a single message and never escape.
"""
import logging
from functools import wraps
from typing import Callable, Dict, Optional

from hrm.core.errors import error_message
from hrm.schemas.common import CommandResponse

logger = logging.getLogger(__name__)


class CommandRouter:
    """Named collection of boundary commands"""

    def __init__(self):
        self.commands: Dict[str, Callable[..., CommandResponse]] = {}

    def command(self, name: Optional[str] = None):
        """
        Register a handler ``handler(ctx, **kwargs)`` under ``name``

        The wrapped handler returns CommandResponse.success(result) or
        CommandResponse.failure(message).
        """
        def decorator(func):
            @wraps(func)
            def wrapper(ctx, *args, **kwargs) -> CommandResponse:
                try:
                    return CommandResponse.success(func(ctx, *args, **kwargs))
                except Exception as exc:
                    return CommandResponse.failure(error_message(exc, ctx.settings.APP_ENV))

            self.commands[name or func.__name__] = wrapper
            return wrapper
        return decorator

    def include_router(self, other: "CommandRouter") -> None:
        for name, handler in other.commands.items():
            if name in self.commands:
                raise ValueError(f"Command registered twice: {name}")
            self.commands[name] = handler
