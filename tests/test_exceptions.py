from busroster.exceptions import ApiError, BusRosterError, NetworkError, ValidationError


def test_errors_share_base() -> None:
    for exc_type in (ApiError, NetworkError, ValidationError):
        assert issubclass(exc_type, BusRosterError)


def test_api_error_status() -> None:
    exc = ApiError("failed", status=503)
    assert str(exc) == "failed"
    assert exc.status == 503
    assert ApiError("failed").status is None
