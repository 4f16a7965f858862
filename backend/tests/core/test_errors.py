"""Error Hierarchy — codes, statuses and the REST envelope.

Tests:
    - AuthenticationError maps failure tag to status and code
    - DataFetchError carries its operation into the response context
    - Envelope never includes debug_info
"""

from app.core.domain_types import AuthFailure
from app.core.errors import (
    AuthenticationError, DataFetchError, DatabaseError, ErrorCategory,
    ErrorContext, ResourceNotFoundError,
)


def test_invalid_credentials_is_401():
    err = AuthenticationError(AuthFailure.INVALID_CREDENTIALS)
    assert err.http_status == 401
    assert err.code == "CredentialsSignin"
    assert err.category is ErrorCategory.AUTHENTICATION


def test_unexpected_sign_in_failure_is_500():
    err = AuthenticationError(AuthFailure.UNEXPECTED)
    assert err.http_status == 500
    assert err.failure is AuthFailure.UNEXPECTED


def test_data_fetch_error_envelope():
    err = DataFetchError("Failed to fetch revenue data.", "fetch_revenue")
    body = err.to_response()["error"]

    assert err.http_status == 503
    assert body["code"] == "DATA_FETCH_ERROR"
    assert body["message"] == "Failed to fetch revenue data."
    assert body["context"]["operation"] == "fetch_revenue"


def test_not_found_names_resource():
    err = ResourceNotFoundError("Invoice", "abc", ErrorContext(invoice_id="abc"))
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["message"] == "Invoice 'abc' not found"
    assert body["context"]["invoice_id"] == "abc"


def test_debug_info_is_not_exposed():
    err = DatabaseError(
        "pool exhausted", "session",
        ErrorContext(debug_info={"dsn": "postgresql://secret"}),
    )
    assert "secret" not in str(err.to_response())
    assert err.to_response()["error"]["category"] == "database"
