"""
storefront_client.views.auth

Sign-in, registration and external-provider callback pages.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront_client.app import StorefrontContext
from storefront_client.services.identity import Credentials, RegistrationProfile
from storefront_client.views.outcomes import LOGIN_PATH, Notice, Redirect


@dataclass(slots=True)
class LoginView:
    ctx: StorefrontContext
    email: str = ""
    password: str = ""
    error: str = ""
    loading: bool = False

    async def submit(self, *, next_path: str = "/") -> Redirect | Notice:
        self.loading = True
        self.error = ""
        try:
            result = await self.ctx.identity.login(
                Credentials(email=self.email, password=self.password)
            )
            if not result.ok:
                # Fields stay populated so the shopper can retry.
                self.error = result.error or "Login failed"
                return Notice(self.error)
            await self.ctx.cart.fetch()
            return Redirect(to=next_path, replace=True)
        finally:
            self.loading = False


@dataclass(slots=True)
class RegisterView:
    ctx: StorefrontContext
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    accept_terms: bool = False
    error: str = ""
    success: bool = False

    def edit(self, **fields: object) -> None:
        for key, value in fields.items():
            setattr(self, key, value)
        # Typing clears the previous error.
        self.error = ""

    async def submit(self) -> Redirect | Notice:
        result = await self.ctx.identity.register(
            RegistrationProfile(
                name=self.name,
                email=self.email,
                password=self.password,
                confirm_password=self.confirm_password,
                accept_terms=self.accept_terms,
            )
        )
        if not result.ok:
            self.error = result.error or "Registration failed"
            return Notice(self.error)
        self.success = True
        return Redirect(to=LOGIN_PATH)


@dataclass(slots=True)
class ExternalSignInView:
    ctx: StorefrontContext
    status: str = "processing"
    message: str = "Signing in with Google..."
    _done: bool = field(default=False, repr=False)

    async def complete(self, *, code: str | None, error: str | None = None) -> Redirect | Notice:
        if self._done:
            # Codes are single-use; a re-render must not exchange the same code twice.
            return Notice(self.message, level="info" if self.status == "success" else "error")
        self._done = True

        result = await self.ctx.identity.complete_external_sign_in(code, provider_error=error)
        if not result.ok:
            self.status = "error"
            self.message = result.error or "Authentication failed"
            return Notice(self.message)

        self.status = "success"
        self.message = "Successfully signed in! Redirecting..."
        await self.ctx.cart.fetch()
        return Redirect(to="/", replace=True)
