# storefront/core/identity.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union
import base64
import json
import logging

from jose import jwt, JWTError

from storefront.config import Settings, get_settings

logger = logging.getLogger(__name__)

UserId = Union[str, int]
IdentityListener = Callable[["Identity"], None]

# claims checked, in order, when resolving a user id from a token
IDENTITY_CLAIMS = ("sub", "user_id", "id", "uid", "username")


class AuthenticationError(Exception):
    pass


@dataclass(frozen=True)
class Identity:
    """
    Who the cart and wishlist belong to: a guest session (user_id is None)
    or an authenticated user.
    """
    user_id: Optional[UserId] = None

    @classmethod
    def guest(cls) -> "Identity":
        return cls()

    @classmethod
    def authenticated(cls, user_id: UserId) -> "Identity":
        if user_id in (None, ""):
            raise ValueError("Authenticated identity requires a user id")
        return cls(user_id=user_id)

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    def __str__(self) -> str:
        return "Guest" if self.is_guest else f"Authenticated({self.user_id})"


GUEST = Identity.guest()


def _claims_without_verification(token: str) -> Optional[dict]:
    """
    Best-effort decode of a JWT-like token payload without verifying the signature.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    payload_b64 = parts[1]
    rem = len(payload_b64) % 4
    if rem:
        payload_b64 += "=" * (4 - rem)
    try:
        payload = json.loads(base64.urlsafe_b64decode(payload_b64.encode("utf-8")))
    except (ValueError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def user_id_from_token(token: str, secret: Optional[str] = None, algorithm: Optional[str] = None) -> Optional[str]:
    """
    Return the first identity claim found in `token`, or None.
    Signed tokens are verified with the configured secret first; if that fails
    the payload is read without verification.
    """
    if not token:
        return None
    if token.lower().startswith("bearer "):
        token = token.split(" ", 1)[1]
    settings = get_settings()
    try:
        payload: Any = jwt.decode(token, secret or settings.JWT_SECRET,
                                  algorithms=[algorithm or settings.JWT_ALGORITHM])
    except JWTError:
        payload = _claims_without_verification(token)
    if not payload:
        return None
    for claim in IDENTITY_CLAIMS:
        if payload.get(claim):
            return str(payload[claim])
    return None


class IdentityProvider:
    """
    Holds the current identity and notifies subscribers when it changes.

    Usage:
        provider = IdentityProvider()
        unsubscribe = provider.subscribe(lambda identity: print(identity))
        provider.login(42)      # -> Authenticated(42)
        provider.logout()       # -> Guest
    """

    def __init__(self, identity: Identity = GUEST, settings: Optional[Settings] = None):
        self._identity = identity
        self._settings = settings or get_settings()
        self._listeners: List[IdentityListener] = []

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return not self._identity.is_guest

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_identity(self, identity: Identity) -> None:
        if identity == self._identity:
            return
        previous = self._identity
        self._identity = identity
        logger.info("Identity changed: %s -> %s", previous, identity)
        for listener in list(self._listeners):
            listener(identity)

    def login(self, user_id: Optional[UserId]) -> Identity:
        # a user without an id keeps the guest partition
        if user_id in (None, ""):
            logger.warning("Login without a user id; staying on guest identity")
            self.set_identity(GUEST)
        else:
            self.set_identity(Identity.authenticated(user_id))
        return self._identity

    def login_with_token(self, token: str) -> Identity:
        user_id = user_id_from_token(token, secret=self._settings.JWT_SECRET,
                                     algorithm=self._settings.JWT_ALGORITHM)
        if not user_id:
            raise AuthenticationError("Could not resolve a user from the supplied token")
        return self.login(user_id)

    def logout(self) -> Identity:
        self.set_identity(GUEST)
        return self._identity
