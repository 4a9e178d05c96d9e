# admin_portal/dependencies.py
"""Service providers: every collaborator is passed in explicitly."""
from fastapi import Depends

from admin_portal.core.clock import Clock, get_clock
from admin_portal.core.config import Settings, get_settings
from admin_portal.core.notifier import Notifier, get_notifier
from admin_portal.repositories.group_repo import GroupRepository
from admin_portal.repositories.one_time_code_repo import OneTimeCodeRepository
from admin_portal.repositories.transaction_repo import TransactionRepository
from admin_portal.repositories.user_repo import UserRepository
from admin_portal.services.auth_service import AuthService
from admin_portal.services.group_service import GroupService
from admin_portal.services.transaction_service import TransactionService
from admin_portal.services.user_service import UserService


def get_auth_service(
    clock: Clock = Depends(get_clock),
    notifier: Notifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(
        user_repo=UserRepository(),
        code_repo=OneTimeCodeRepository(),
        group_repo=GroupRepository(),
        notifier=notifier,
        clock=clock,
        settings=settings,
    )


def get_user_service(clock: Clock = Depends(get_clock)) -> UserService:
    return UserService(UserRepository(), clock)


def get_transaction_service(clock: Clock = Depends(get_clock)) -> TransactionService:
    return TransactionService(TransactionRepository(), clock)


def get_group_service(clock: Clock = Depends(get_clock)) -> GroupService:
    return GroupService(GroupRepository(), clock)
