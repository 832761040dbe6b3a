"""In-memory user management with simulated datastore latency.

Every operation reports its outcome through a `ProcessingResult`. Expected
failures (blank input, invalid or unknown id, duplicate email, a record that
fails validation) are returned as failed results. Anything unexpected raised
while an operation runs is logged and converted into a failed result too, so
callers only ever need to inspect the envelope.

Concurrency:
    The service does no locking of its own by default. Two `create_user` calls
    racing on the same email can both pass the uniqueness check across their
    simulated lookup delay. Pass `serialize_writes=True` to run creates and
    updates one at a time behind an `asyncio.Lock`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, TypeVar

from tessera import config
from tessera.domain.result import ProcessingResult
from tessera.domain.stopwatch import Stopwatch
from tessera.domain.user import User

if TYPE_CHECKING:
    from tessera.interfaces.latency import Latency

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ============================================================================
#                             Failure messages
# ============================================================================

NAME_REQUIRED = "Name cannot be null or empty."
EMAIL_REQUIRED = "Email cannot be null or empty."
INVALID_USER_ID = "User ID must be greater than 0."
CREATED_USER_INVALID = "Created user failed validation."
UPDATED_USER_INVALID = "Updated user failed validation."


def duplicate_email(email: str) -> str:
    """Message for a create whose email is already registered."""
    return f"User with email '{email}' already exists."


def email_in_use(email: str) -> str:
    """Message for an update whose email belongs to another user."""
    return f"Email '{email}' is already in use by another user."


def user_not_found(user_id: int) -> str:
    """Message for an id with no matching user."""
    return f"User with ID {user_id} not found."


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


# ============================================================================
#                               Service
# ============================================================================


class UserService:
    """Manage `User` records held in memory.

    Users are kept in insertion order and receive sequential ids starting at 1.
    Emails are unique, compared case-insensitively.

    Args:
        latency: Source of the simulated datastore delays.
        serialize_writes: When True, `create_user` and `update_user` are run
            one at a time so that concurrent writers cannot both claim an email.
    """

    def __init__(self, latency: Latency, *, serialize_writes: bool = False) -> None:
        self._latency = latency
        self._users: list[User] = []
        self._next_id = 1
        self._write_lock = asyncio.Lock() if serialize_writes else None

    @property
    def serialize_writes(self) -> bool:
        """Whether writes are serialized behind a lock."""
        return self._write_lock is not None

    def _write_guard(self) -> contextlib.AbstractAsyncContextManager[object]:
        if self._write_lock is None:
            return contextlib.nullcontext()
        return self._write_lock

    # --- lookups ---

    def _find_by_id(self, user_id: int) -> User | None:
        return next((u for u in self._users if u.id == user_id), None)

    def _email_taken(self, email: str, *, exclude_id: int | None = None) -> bool:
        wanted = email.lower()
        return any(
            u.email.lower() == wanted for u in self._users if u.id != exclude_id
        )

    @staticmethod
    def _reject(message: str, stopwatch: Stopwatch) -> ProcessingResult[T]:
        logger.warning(message)
        return ProcessingResult.fail(message, stopwatch.stop())

    @staticmethod
    def _crashed(
        action: str, exc: Exception, stopwatch: Stopwatch
    ) -> ProcessingResult[T]:
        logger.exception("Unexpected error while trying to %s", action)
        return ProcessingResult.fail(f"Failed to {action}: {exc}", stopwatch.stop())

    # --- operations ---

    async def create_user(self, name: str, email: str) -> ProcessingResult[User]:
        """Create and store a new user.

        Args:
            name: Display name; must not be blank.
            email: Email address; must not be blank and must not already be
                registered (case-insensitive).

        Returns:
            A result carrying the stored `User`, or a failed result explaining
            why nothing was stored.
        """
        stopwatch = Stopwatch()
        try:
            async with self._write_guard():
                return await self._create_user(name, email, stopwatch)
        except Exception as exc:  # pylint: disable=broad-except
            return self._crashed("create user", exc, stopwatch)

    async def _create_user(
        self, name: str, email: str, stopwatch: Stopwatch
    ) -> ProcessingResult[User]:
        logger.debug("Creating user name=%r email=%r", name, email)
        if _is_blank(name):
            return self._reject(NAME_REQUIRED, stopwatch)
        if _is_blank(email):
            return self._reject(EMAIL_REQUIRED, stopwatch)

        await self._latency.pause(config.CREATE_LOOKUP_MS)

        if self._email_taken(email):
            return self._reject(duplicate_email(email), stopwatch)

        user = User(id=self._next_id, name=name, email=email)
        self._next_id += 1
        if not user.is_valid():
            return self._reject(CREATED_USER_INVALID, stopwatch)

        await self._latency.pause(config.CREATE_SAVE_MS)

        self._users.append(user)
        logger.info("Created user %s (%s)", user.id, user.email)
        return ProcessingResult.ok(user, stopwatch.stop())

    async def validate_user(self, user_id: int) -> ProcessingResult[bool]:
        """Check whether the stored user with `user_id` passes validation.

        The payload is the validation verdict; the result only fails when the id
        is invalid or unknown.
        """
        stopwatch = Stopwatch()
        try:
            logger.debug("Validating user %s", user_id)
            if user_id <= 0:
                return self._reject(INVALID_USER_ID, stopwatch)

            await self._latency.pause(config.VALIDATE_LOOKUP_MS)

            if (user := self._find_by_id(user_id)) is None:
                return self._reject(user_not_found(user_id), stopwatch)

            await self._latency.pause(config.VALIDATE_CHECK_MS)

            is_valid = user.is_valid()
            logger.debug("Validated user %s: valid=%s", user_id, is_valid)
            return ProcessingResult.ok(is_valid, stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return self._crashed("validate user", exc, stopwatch)

    async def update_user(
        self, user_id: int, name: str | None = None, email: str | None = None
    ) -> ProcessingResult[User]:
        """Update the name and/or email of an existing user.

        Blank or missing values leave the corresponding field untouched. The id
        and creation timestamp never change.

        Note:
            Changes are applied before the updated record is validated; a
            failed validation does not roll them back.
        """
        stopwatch = Stopwatch()
        try:
            async with self._write_guard():
                return await self._update_user(user_id, name, email, stopwatch)
        except Exception as exc:  # pylint: disable=broad-except
            return self._crashed("update user", exc, stopwatch)

    async def _update_user(
        self,
        user_id: int,
        name: str | None,
        email: str | None,
        stopwatch: Stopwatch,
    ) -> ProcessingResult[User]:
        logger.debug("Updating user %s name=%r email=%r", user_id, name, email)
        if user_id <= 0:
            return self._reject(INVALID_USER_ID, stopwatch)

        await self._latency.pause(config.UPDATE_LOOKUP_MS)

        if (user := self._find_by_id(user_id)) is None:
            return self._reject(user_not_found(user_id), stopwatch)

        new_name = None if _is_blank(name) else name
        new_email = None if _is_blank(email) else email

        if new_email is not None and self._email_taken(new_email, exclude_id=user_id):
            return self._reject(email_in_use(new_email), stopwatch)

        if new_name is not None:
            user.name = new_name
        if new_email is not None:
            user.email = new_email

        if not user.is_valid():
            return self._reject(UPDATED_USER_INVALID, stopwatch)

        await self._latency.pause(config.UPDATE_SAVE_MS)

        logger.info("Updated user %s", user.id)
        return ProcessingResult.ok(user, stopwatch.stop())

    async def get_user(self, user_id: int) -> ProcessingResult[User]:
        """Fetch the user with `user_id`."""
        stopwatch = Stopwatch()
        try:
            logger.debug("Fetching user %s", user_id)
            if user_id <= 0:
                return self._reject(INVALID_USER_ID, stopwatch)

            await self._latency.pause(config.GET_LOOKUP_MS)

            if (user := self._find_by_id(user_id)) is None:
                return self._reject(user_not_found(user_id), stopwatch)
            logger.debug("Fetched user %s", user_id)
            return ProcessingResult.ok(user, stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return self._crashed("get user", exc, stopwatch)

    async def get_all_users(self) -> ProcessingResult[list[User]]:
        """Return a snapshot of every stored user, in insertion order.

        The list is a copy; the `User` objects in it are the stored ones.
        """
        stopwatch = Stopwatch()
        try:
            logger.debug("Fetching all users")
            await self._latency.pause(config.GET_ALL_QUERY_MS)

            users = list(self._users)
            logger.debug("Fetched %d users", len(users))
            return ProcessingResult.ok(users, stopwatch.stop())
        except Exception as exc:  # pylint: disable=broad-except
            return self._crashed("get all users", exc, stopwatch)

    def count(self) -> int:
        """Number of stored users."""
        return len(self._users)

    def clear(self) -> None:
        """Remove every user and restart ids at 1."""
        self._users.clear()
        self._next_id = 1
        logger.debug("Cleared all users")

    # aliases
    get_user_count = count
    clear_all_users = clear
