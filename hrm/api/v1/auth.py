"""
Authentication and user administration commands
"""
from typing import List, Optional

from hrm.api.commands import CommandRouter
from hrm.core.session import UserSession
from hrm.schemas.auth import ChangePasswordRequest, LoginRequest, ResetPasswordRequest
from hrm.schemas.user import CreateUserRequest, UpdateUserRequest, UserInfo
from hrm.services import auth_service, user_service

router = CommandRouter()


@router.command("login")
def login_command(ctx, username: str, password: str) -> UserSession:
    """Check credentials and store the resulting session"""
    credentials = LoginRequest(username=username, password=password)
    with ctx.database.session_scope() as db:
        session = auth_service.authenticate(db, credentials.username, credentials.password)
    ctx.sessions.set(session)
    return session


@router.command("logout")
def logout_command(ctx) -> None:
    session = ctx.sessions.get()
    if session is not None:
        with ctx.database.session_scope() as db:
            auth_service.record_logout(db, session)
    ctx.sessions.clear()


@router.command("get_current_user")
def get_current_user_command(ctx) -> Optional[UserSession]:
    return ctx.sessions.get()


@router.command("change_own_password")
def change_own_password_command(ctx, current_password: str, new_password: str) -> None:
    request = ChangePasswordRequest(current_password=current_password, new_password=new_password)
    with ctx.database.session_scope() as db:
        auth_service.change_own_password(
            db, request.current_password, request.new_password, actor=ctx.sessions.get()
        )


@router.command("create_user")
def create_user_command(ctx, user) -> UserInfo:
    """Create a user (needs can_manage_users)"""
    request = CreateUserRequest.model_validate(user)
    with ctx.database.session_scope() as db:
        return user_service.create_user(db, request, actor=ctx.sessions.get())


@router.command("get_all_users")
def get_all_users_command(ctx) -> List[UserInfo]:
    with ctx.database.session_scope() as db:
        return user_service.list_users(db, actor=ctx.sessions.get())


@router.command("update_user")
def update_user_command(ctx, user) -> int:
    request = UpdateUserRequest.model_validate(user)
    with ctx.database.session_scope() as db:
        return user_service.update_user(db, request, actor=ctx.sessions.get())


@router.command("delete_user")
def delete_user_command(ctx, user_id: int) -> bool:
    with ctx.database.session_scope() as db:
        return user_service.delete_user(db, user_id, actor=ctx.sessions.get())


@router.command("reset_user_password")
def reset_user_password_command(ctx, user_id: int, new_password: str) -> None:
    request = ResetPasswordRequest(user_id=user_id, new_password=new_password)
    with ctx.database.session_scope() as db:
        user_service.reset_user_password(
            db, request.user_id, request.new_password, actor=ctx.sessions.get()
        )
