"""
Main command router
"""
from hrm.api.commands import CommandRouter
from hrm.api.v1 import audit, auth, database, employees, images
from hrm.schemas.common import CommandResponse

api_router = CommandRouter()

api_router.include_router(auth.router)
api_router.include_router(employees.router)
api_router.include_router(database.router)
api_router.include_router(audit.router)
api_router.include_router(images.router)

COMMANDS = api_router.commands


def invoke(ctx, name: str, **kwargs) -> CommandResponse:
    """Dispatch a command by name; unknown names fail like any other command"""
    handler = COMMANDS.get(name)
    if handler is None:
        return CommandResponse.failure(f"Unknown command: {name}")
    return handler(ctx, **kwargs)
