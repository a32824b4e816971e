"""Unit tests for the trigger secret guard."""

import pytest

from factgrid.application.api.v1.guard import TriggerGuard, presented_secret, secret_matches
from factgrid.domain.shared.error import AuthRequiredError


class TestPresentedSecret:
    def test_query_parameter(self):
        assert presented_secret("s3cret", None) == "s3cret"

    def test_query_parameter_wins_over_header(self):
        assert presented_secret("from-query", "Bearer from-header") == "from-query"

    def test_bearer_header(self):
        assert presented_secret(None, "Bearer s3cret") == "s3cret"

    def test_scheme_is_case_insensitive(self):
        assert presented_secret(None, "bearer s3cret") == "s3cret"

    def test_other_scheme_is_ignored(self):
        assert presented_secret(None, "Basic dXNlcjpwYXNz") is None

    def test_empty_token(self):
        assert presented_secret(None, "Bearer ") is None

    def test_nothing_presented(self):
        assert presented_secret(None, None) is None


class TestSecretMatches:
    def test_no_configured_secret_allows_all(self):
        assert secret_matches(None, None)
        assert secret_matches("", "anything")

    def test_match(self):
        assert secret_matches("s3cret", "s3cret")

    def test_mismatch(self):
        assert not secret_matches("s3cret", "guess")

    def test_missing(self):
        assert not secret_matches("s3cret", None)


class TestTriggerGuard:
    def test_check_passes(self):
        TriggerGuard(expected="s3cret", presented="s3cret").check()

    def test_check_raises(self):
        with pytest.raises(AuthRequiredError) as exc:
            TriggerGuard(expected="s3cret", presented=None).check()
        assert exc.value.code == "missing_secret"
