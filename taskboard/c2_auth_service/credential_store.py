"""Service layer for identities and their credentials."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from taskboard.c1_common_types.identifiers import UserId
from taskboard.c1_common_types.sentinels import UNSET
from taskboard.c1_database_session.base import utcnow
from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.c1_errors.errors import DuplicateEmail, InvalidCredentials, NotFound, ValidationFailed
from taskboard.c1_user_models.updates import ProfileUpdate
from taskboard.c1_user_models.user import User, normalize_email
from taskboard.c1_user_models.user_store import UserStore
from taskboard.c2_auth_service.external_identity import ExternalProfile
from taskboard.c2_auth_service.passwords import (
    DEFAULT_BCRYPT_ROUNDS,
    MIN_PASSWORD_LENGTH,
    generate_random_password,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


class CredentialStore:
    """Registers identities and checks their passwords.

    Returned ``User`` objects are detached from their session; every
    attribute is loaded and safe to read.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ):
        self.db_manager = db_manager
        self.bcrypt_rounds = bcrypt_rounds
        self.min_password_length = min_password_length
        self._dummy_digest: Optional[str] = None

    def _hash(self, plaintext: str) -> str:
        return hash_password(plaintext, rounds=self.bcrypt_rounds, min_length=self.min_password_length)

    def _burn_verify(self, plaintext: str) -> None:
        """Spend a verification's worth of time when no identity matched."""
        if self._dummy_digest is None:
            self._dummy_digest = self._hash(generate_random_password())
        verify_password(plaintext or "", self._dummy_digest)

    def register(
        self,
        email: str,
        name: str,
        plaintext: str,
        avatar_url: Optional[str] = None,
    ) -> User:
        """Create a new identity.

        Raises:
            DuplicateEmail: If the normalized email is already registered
            ValidationFailed: If the password is too short or the name is blank
        """
        email = normalize_email(email)
        if not email:
            raise ValidationFailed("Email is required")
        if not name or not name.strip():
            raise ValidationFailed("Name is required")

        password_hash = self._hash(plaintext)

        with self.db_manager.session_scope() as session:
            users = UserStore(session)
            if users.find_by_email(email) is not None:
                logger.info(f"Registration rejected, email already registered: {email}")
                raise DuplicateEmail()

            now = utcnow()
            user = User(
                id=UserId.new(),
                email=email,
                name=name.strip(),
                password_hash=password_hash,
                avatar_url=avatar_url,
                created_at=now,
                updated_at=now,
            )
            try:
                users.insert(user)
            except IntegrityError:
                # Lost a race with a concurrent registration of the same email
                session.rollback()
                raise DuplicateEmail()

        logger.info(f"Registered user {user.id}")
        return user

    def verify(self, user: User, plaintext: str) -> bool:
        return verify_password(plaintext, user.password_hash)

    def login(self, email: str, plaintext: str) -> User:
        """Resolve an email/password pair to an identity.

        Raises:
            InvalidCredentials: Unknown email or wrong password
        """
        with self.db_manager.session_scope() as session:
            user = UserStore(session).find_by_email(email or "")

        if user is None:
            self._burn_verify(plaintext)
            logger.info("Login failed: unknown email")
            raise InvalidCredentials()
        if not self.verify(user, plaintext):
            logger.info(f"Login failed: wrong password for user {user.id}")
            raise InvalidCredentials()
        return user

    def login_external(self, profile: ExternalProfile) -> User:
        """Log in an externally verified identity, registering it on first sight."""
        with self.db_manager.session_scope() as session:
            user = UserStore(session).find_by_email(profile.email)
        if user is not None:
            return user

        logger.info("Registering new identity from external provider")
        try:
            return self.register(
                email=profile.email,
                name=profile.name,
                plaintext=generate_random_password(),
                avatar_url=profile.avatar_url or None,
            )
        except DuplicateEmail:
            # Registered concurrently by another request; log that one in
            with self.db_manager.session_scope() as session:
                user = UserStore(session).find_by_email(profile.email)
            if user is None:
                logger.warning("External login failed: identity vanished after a duplicate registration")
                raise InvalidCredentials()
            return user

    def get_by_id(self, user_id: UserId) -> Optional[User]:
        with self.db_manager.session_scope() as session:
            return UserStore(session).find_by_id(user_id)

    def update_profile(self, user_id: UserId, update: ProfileUpdate) -> User:
        """Apply a profile change, re-checking email uniqueness.

        Raises:
            NotFound: If the identity no longer exists
            DuplicateEmail: If the new email belongs to another identity
        """
        values = {}
        if update.name is not UNSET:
            if not update.name or not update.name.strip():
                raise ValidationFailed("Name cannot be empty")
            values["name"] = update.name.strip()
        if update.avatar_url is not UNSET:
            values["avatar_url"] = update.avatar_url

        with self.db_manager.session_scope() as session:
            users = UserStore(session)
            user = users.find_by_id(user_id)
            if user is None:
                raise NotFound("User not found")

            if update.email is not UNSET:
                email = normalize_email(update.email or "")
                if not email:
                    raise ValidationFailed("Email cannot be empty")
                if email != user.email:
                    existing = users.find_by_email(email)
                    if existing is not None and existing.id != user.id:
                        raise DuplicateEmail()
                    values["email"] = email

            if values:
                values["updated_at"] = utcnow()
                try:
                    user = users.update_by_id(user_id, values)
                except IntegrityError:
                    session.rollback()
                    raise DuplicateEmail()

        return user

    def change_password(self, user_id: UserId, current_plaintext: str, new_plaintext: str) -> None:
        """Replace the password after checking the current one.

        Tokens issued before the change stay valid until they expire.

        Raises:
            InvalidCredentials: If the current password is wrong
            ValidationFailed: If the new password is too short
        """
        with self.db_manager.session_scope() as session:
            users = UserStore(session)
            user = users.find_by_id(user_id)
            if user is None:
                raise NotFound("User not found")
            if not self.verify(user, current_plaintext):
                logger.info(f"Password change rejected for user {user_id}: wrong current password")
                raise InvalidCredentials("Current password is incorrect")
            users.update_by_id(user_id, {"password_hash": self._hash(new_plaintext), "updated_at": utcnow()})

        logger.info(f"Password changed for user {user_id}")
