"""Shared-secret protection for on-demand triggers."""

import hmac
from dataclasses import dataclass

from dishka import from_context, provide
from fastapi import Request

from factgrid.config import Config
from factgrid.domain.shared.error import AuthRequiredError
from factgrid.util.di.base import Provider
from factgrid.util.di.scope import Scope


def presented_secret(query_secret: str | None, authorization: str | None) -> str | None:
    """Secret from ``?secret=`` or an ``Authorization: Bearer`` header."""
    if query_secret:
        return query_secret
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return None


def secret_matches(expected: str | None, presented: str | None) -> bool:
    """Constant-time comparison. No configured secret means no protection."""
    if not expected:
        return True
    if presented is None:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), presented.encode("utf-8"))


@dataclass(frozen=True)
class TriggerGuard:
    expected: str | None
    presented: str | None

    def check(self) -> None:
        """Raise unless the caller presented the configured secret.

        Raises:
            AuthRequiredError: Secret missing or wrong.
        """
        if not secret_matches(self.expected, self.presented):
            raise AuthRequiredError("A valid trigger secret is required", code="missing_secret")


class ApiProvider(Provider):
    request = from_context(provides=Request, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    def get_trigger_guard(self, request: Request, config: Config) -> TriggerGuard:
        return TriggerGuard(
            expected=config.triggers.cron_secret,
            presented=presented_secret(
                request.query_params.get("secret"),
                request.headers.get("authorization"),
            ),
        )
