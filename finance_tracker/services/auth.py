"""
Authentication Service

Username/password accounts stored as rows in the hosted ``users`` table.

Passwords are hashed with passlib's pbkdf2_sha256 (pure Python, no native
backend needed); the plaintext never reaches the store.

Like the transaction store client, this service never raises on store
failures. Every path returns an ``AuthResult`` (or a bool) that the UI can
render directly.
"""

from typing import Optional

from passlib.context import CryptContext

from finance_tracker.log import get_logger
from finance_tracker.models.user import AuthResult, User
from finance_tracker.services.storage import Row, RowStoreInterface, StorageError

pwd_ctx = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """Hash a plaintext password (never store plaintext)."""
    if password is None:
        raise ValueError("password cannot be None")
    return pwd_ctx.hash(password)


def verify_password(plain: str, hashed: Optional[str]) -> bool:
    """Verify plain password against hashed. Returns False on any error."""
    if plain is None or not hashed:
        return False
    try:
        return pwd_ctx.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


class AuthService:
    """Login, registration and profile updates over the users table."""

    def __init__(self, users: RowStoreInterface):
        self._users = users

    async def _get_user_row(self, username: str) -> Optional[Row]:
        rows = await self._users.select(filters={"username": username})
        return rows[0] if rows else None

    async def login(self, username: str, password: str) -> AuthResult:
        username = (username or "").strip()
        try:
            row = await self._get_user_row(username)
        except StorageError as e:
            logger.error("login_failed", username=username, error=str(e))
            return AuthResult(success=False, message="Login error")

        if row is None:
            return AuthResult(success=False, message="User not found")

        if not verify_password(password, row.get("password_hash")):
            logger.info("login_rejected", username=username)
            return AuthResult(success=False, message="Invalid password")

        logger.info("login_succeeded", username=username)
        return AuthResult(
            success=True,
            user=User(username=row["username"], avatar_url=row.get("avatar_url")),
        )

    async def register(self, username: str, password: str) -> AuthResult:
        username = (username or "").strip()
        if not username or not password:
            return AuthResult(success=False, message="Username and password are required")

        try:
            if await self._get_user_row(username) is not None:
                return AuthResult(success=False, message="Username taken")

            await self._users.insert({
                "username": username,
                "password_hash": hash_password(password),
                "avatar_url": None,
            })
        except StorageError as e:
            logger.error("registration_failed", username=username, error=str(e))
            return AuthResult(success=False, message=f"Registration failed: {e}")

        logger.info("user_registered", username=username)
        return AuthResult(success=True, user=User(username=username))

    async def update_avatar(self, username: str, avatar_url: str) -> bool:
        try:
            changed = await self._users.update(
                filters={"username": username},
                values={"avatar_url": avatar_url or None},
            )
        except StorageError as e:
            logger.error("avatar_update_failed", username=username, error=str(e))
            return False
        return changed > 0
