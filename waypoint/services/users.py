"""User account management."""
from typing import Dict, Optional

from waypoint.core.constants import PROVIDER_EMAIL
from waypoint.core.exceptions import (
    EmptyPasswordError,
    IncorrectOldPasswordError,
    InstanceNotFoundError,
    PasswordUpdateFailedError,
    PasswordsDoNotMatchError,
    PermissionDeniedError,
    SSOPasswordChangeError,
    TemplateSwitchError,
    UserNotAuthenticatedError,
)
from waypoint.core.logging_config import get_logger
from waypoint.core.security import get_password_hash, new_id, verify_password
from waypoint.db.models import User
from waypoint.repositories.base import InstanceRepository, UserRepository

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository, instance_repo: InstanceRepository):
        self.user_repo = user_repo
        self.instance_repo = instance_repo

    def create_user(self, user: User, password_confirm: str) -> None:
        """
        Hash the user's password, assign an id and store the user.

        Raises:
            PasswordsDoNotMatchError: If password_confirm differs from user.password
        """
        if user.password != password_confirm:
            raise PasswordsDoNotMatchError()

        user.password = get_password_hash(user.password)
        user.id = new_id()
        self.user_repo.create(user)
        logger.info("user_created", user_id=user.id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.user_repo.get_by_email(email)

    def update_user(self, user: User) -> None:
        self.user_repo.update(user)

    def update_user_profile(self, user: User, profile: Dict[str, str]) -> None:
        """
        Apply submitted profile form fields. Fields missing from ``profile`` are left alone.

        Empty display_name and work_type clear the stored value. A work_type
        of "other" takes its value from other_work_type. show_email is a
        checkbox and only "on" enables it.
        """
        if "name" in profile:
            user.name = profile["name"]

        if "display_name" in profile:
            user.display_name = profile["display_name"] or None

        if "work_type" in profile:
            work_type = profile["work_type"]
            if work_type == "other":
                work_type = profile.get("other_work_type", "")
            user.work_type = work_type or None

        if "show_email" in profile:
            user.share_email = profile["show_email"] == "on"

        self.user_repo.update(user)

    def change_password(
        self, user: User, old_password: str, new_password: str, confirm_password: str
    ) -> None:
        """
        Replace the password of an email/password account.

        The new password is checked before the old one is verified.
        """
        if user.provider != PROVIDER_EMAIL:
            raise SSOPasswordChangeError()

        if new_password == "":
            raise EmptyPasswordError()

        if new_password != confirm_password:
            raise PasswordsDoNotMatchError()

        if not verify_password(old_password, user.password):
            raise IncorrectOldPasswordError()

        user.password = get_password_hash(new_password)
        try:
            self.user_repo.update(user)
        except Exception as e:
            logger.error("password_update_failed", user_id=user.id, error=str(e))
            raise PasswordUpdateFailedError() from e

        logger.info("password_changed", user_id=user.id)

    def switch_instance(self, user: Optional[User], instance_id: str) -> None:
        """
        Make one of the user's own non-template instances their current one.

        Raises:
            UserNotAuthenticatedError: If there is no user
            InstanceNotFoundError: If the instance does not exist
            TemplateSwitchError: If the instance is a template
            PermissionDeniedError: If the instance belongs to someone else
        """
        if user is None:
            raise UserNotAuthenticatedError()

        instance = self.instance_repo.get_by_id(instance_id)
        if instance is None:
            raise InstanceNotFoundError()

        if instance.is_template:
            raise TemplateSwitchError()

        if instance.user_id != user.id:
            raise PermissionDeniedError()

        user.current_instance_id = instance.id
        self.user_repo.update(user)

    def delete_user(self, user_id: str) -> None:
        """Delete a user together with their instances."""
        self.user_repo.delete(user_id)
        logger.info("user_deleted", user_id=user_id)
