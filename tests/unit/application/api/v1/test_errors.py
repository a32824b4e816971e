"""Unit tests for error -> HTTP mapping."""

from factgrid.application.api.v1.errors import map_factgrid_error
from factgrid.domain.shared.error import (
    AllFallbacksExhaustedError,
    AuthRequiredError,
    FactGridError,
    NotFoundError,
    StorageUnavailableError,
    UpstreamUnavailableError,
    ValidationError,
)


class TestMapFactGridError:
    def test_not_found_is_404(self):
        exc = map_factgrid_error(NotFoundError("Dataset not found: x"))

        assert exc.status_code == 404
        assert exc.detail == {"code": "NotFoundError", "message": "Dataset not found: x"}

    def test_validation_error_includes_field(self):
        exc = map_factgrid_error(ValidationError("bad year", field="year"))

        assert exc.status_code == 422
        assert exc.detail["field"] == "year"
        assert exc.detail["code"] == "VALIDATION_ERROR"

    def test_auth_required_is_401_with_challenge(self):
        exc = map_factgrid_error(AuthRequiredError("secret required"))

        assert exc.status_code == 401
        assert exc.headers == {"WWW-Authenticate": "Bearer"}

    def test_infrastructure_errors_are_503(self):
        assert map_factgrid_error(StorageUnavailableError("db down")).status_code == 503
        assert map_factgrid_error(UpstreamUnavailableError("HTTP 502", status_code=502)).status_code == 503
        assert map_factgrid_error(AllFallbacksExhaustedError("btc", [])).status_code == 503

    def test_bare_factgrid_error_is_500(self):
        assert map_factgrid_error(FactGridError("unknown")).status_code == 500
