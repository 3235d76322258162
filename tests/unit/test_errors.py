"""Tests for sb_common.errors."""

from src.sb_common.errors import (
    AppError,
    IncorrectPasswordError,
    NotLoggedInError,
    SessionInvalidatedError,
    StoreError,
    UserExistsError,
    UserNotFoundError,
)


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500

    def test_custom_http_status(self) -> None:
        err = AppError(code=1001, message="taken", http_status=400)
        assert err.http_status == 400

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1001, message="test"), Exception)


class TestSpecificErrors:
    def test_user_exists(self) -> None:
        err = UserExistsError()
        assert (err.http_status, err.message) == (400, "User already exists")

    def test_user_not_found(self) -> None:
        err = UserNotFoundError()
        assert (err.http_status, err.message) == (404, "User not found")

    def test_incorrect_password(self) -> None:
        err = IncorrectPasswordError()
        assert (err.http_status, err.message) == (401, "Incorrect password")

    def test_not_logged_in(self) -> None:
        err = NotLoggedInError()
        assert (err.http_status, err.message) == (401, "Not logged in")

    def test_session_invalidated(self) -> None:
        err = SessionInvalidatedError()
        assert err.code == 1005
        assert err.http_status == 401

    def test_store_error_hides_detail(self) -> None:
        err = StoreError("APIError: [403] The caller does not have permission")
        assert err.http_status == 500
        assert err.message == "Internal server error"
        assert "403" in err.detail


def test_every_error_class_is_in_use_with_a_distinct_code() -> None:
    import src.sb_common.errors as errors_module

    subclasses = {cls.__name__ for cls in AppError.__subclasses__()}
    assert subclasses == {
        "UserExistsError",
        "UserNotFoundError",
        "IncorrectPasswordError",
        "NotLoggedInError",
        "SessionInvalidatedError",
        "StoreError",
    }
    codes = [
        UserExistsError().code,
        UserNotFoundError().code,
        IncorrectPasswordError().code,
        NotLoggedInError().code,
        SessionInvalidatedError().code,
        StoreError("x").code,
    ]
    assert len(set(codes)) == len(codes)
    assert not hasattr(errors_module, "InternalError")
