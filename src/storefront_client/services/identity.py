"""
storefront_client.services.identity

Identity Store: authentication lifecycle and the current principal.

Responsibilities:
- Login, registration, external-provider sign-in completion, logout.
- Keep token, principal and durable storage in lockstep.
- React to the request layer's "unauthenticated" event.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError

from storefront_client.auth.models import Principal
from storefront_client.auth.token_store import FileTokenStore, SessionStorageError
from storefront_client.client.errors import ApiError, UnauthorizedError, message_for
from storefront_client.client.resources import AuthAPI
from storefront_client.models import AuthResponse
from storefront_client.observability.logging import get_logger
from storefront_client.services.result import OperationResult

log = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6
SESSION_NOT_SAVED = "Could not save your session on this device"


@dataclass(frozen=True, slots=True)
class Credentials:
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RegistrationProfile:
    name: str
    email: str
    password: str
    confirm_password: str
    accept_terms: bool = False
    role: str = "user"

    def validate(self) -> str | None:
        """Return the first local validation failure, or None when the form can be submitted."""
        if not self.name.strip():
            return "Please enter your full name"
        if not self.email.strip():
            return "Please enter your email"
        if self.password != self.confirm_password:
            return "Passwords do not match"
        if len(self.password) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        if not self.accept_terms:
            return "Please accept the terms and conditions"
        return None


class IdentityStore:
    """
    Source of truth for the credential token and the signed-in principal.
    The request layer reads the token through `current_token` on every call.
    """

    def __init__(self, *, auth_api: AuthAPI, token_store: FileTokenStore) -> None:
        self._auth_api = auth_api
        self._token_store = token_store
        self._principal: Principal | None = None
        self._token: str | None = None

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._principal is not None and bool(self._token)

    def current_token(self) -> str | None:
        return self._token

    # -- state transitions (no awaits inside: atomic under cooperative scheduling)

    def _set_session(self, *, token: str, principal: Principal) -> None:
        self._token_store.save(token=token, principal=principal)
        self._token = token
        self._principal = principal

    def _clear_session(self) -> None:
        # Memory is cleared even when the file cannot be removed.
        try:
            self._token_store.clear()
        finally:
            self._token = None
            self._principal = None

    # -- operations

    async def restore(self) -> OperationResult:
        """
        Load the durable session and refresh the principal from `/api/auth/me`.

        - 401: cleared by the event reaction; reported as requires_auth.
        - Network failure: the stored principal is kept (offline start).
        """

        stored = self._token_store.load()
        if stored is None:
            return OperationResult.unauthenticated("No saved session")

        self._token = stored.token
        self._principal = stored.principal()

        try:
            user = await self._auth_api.me()
        except UnauthorizedError as e:
            log.info("identity.restore_rejected")
            return OperationResult.unauthenticated(e.message)
        except (ApiError, ValidationError) as e:
            log.warning("identity.restore_offline", error=str(e))
            return OperationResult.success(self._principal)

        # The token may have been cleared by a concurrent 401 while `me()` was in flight.
        if self._token != stored.token:
            return OperationResult.unauthenticated()
        try:
            self._set_session(token=stored.token, principal=user.to_principal())
        except SessionStorageError:
            # The stored copy is stale but the refreshed principal is still usable.
            self._principal = user.to_principal()
        log.info("identity.restored", email=user.email)
        return OperationResult.success(self._principal)

    async def login(self, credentials: Credentials) -> OperationResult:
        log.info("identity.login", email=credentials.email)
        try:
            auth = await self._auth_api.login(
                email=credentials.email, password=credentials.password
            )
        except (ApiError, ValidationError) as e:
            log.info("identity.login_failed", email=credentials.email)
            return OperationResult.failure(message_for(e, "Login failed"))
        return self._accept(auth)

    async def register(self, profile: RegistrationProfile) -> OperationResult:
        problem = profile.validate()
        if problem is not None:
            return OperationResult.failure(problem)

        try:
            user = await self._auth_api.register(
                name=profile.name.strip(),
                email=profile.email.strip(),
                password=profile.password,
                role=profile.role,
            )
        except (ApiError, ValidationError) as e:
            log.info("identity.register_failed", email=profile.email)
            return OperationResult.failure(message_for(e, "Registration failed"))

        # Registration does not sign the user in; the caller routes to login.
        log.info("identity.registered", email=user.email)
        return OperationResult.success(user.to_principal())

    async def complete_external_sign_in(
        self, code: str | None, *, provider_error: str | None = None
    ) -> OperationResult:
        if provider_error:
            return OperationResult.failure(f"Authentication failed: {provider_error}")
        if not code:
            return OperationResult.failure("No authorization code received")

        # One attempt per code: the provider's codes are single-use.
        try:
            auth = await self._auth_api.google_callback(code=code)
        except (ApiError, ValidationError) as e:
            log.info("identity.external_sign_in_failed")
            return OperationResult.failure(message_for(e, "Authentication failed"))
        return self._accept(auth)

    def logout(self) -> OperationResult:
        email = self._principal.email if self._principal else None
        try:
            self._clear_session()
        except SessionStorageError:
            log.warning("identity.logout_storage_failed", email=email)
        log.info("identity.logout", email=email)
        return OperationResult.success()

    def handle_unauthenticated(self, *, reason: str | None = None) -> None:
        """Event-bus subscriber: same clearing as logout."""
        if self._token is None and self._principal is None:
            return
        try:
            self._clear_session()
        except SessionStorageError:
            log.warning("identity.clear_storage_failed", reason=reason)
        log.info("identity.cleared_by_server", reason=reason)

    def _accept(self, auth: AuthResponse) -> OperationResult:
        principal = auth.user.to_principal()
        try:
            self._set_session(token=auth.access_token, principal=principal)
        except SessionStorageError:
            return OperationResult.failure(SESSION_NOT_SAVED)
        log.info("identity.signed_in", email=principal.email)
        return OperationResult.success(principal)


# --- Module Notes -----------------------------------------------------------
# Nothing here raises past the store boundary. A session that cannot be saved
# is not adopted; a session that cannot be removed is still forgotten in memory.
