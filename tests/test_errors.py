"""Tests for skylark.errors and skylark.server.errors."""

import pytest

from skylark.errors import (
    ConfigurationError,
    NotCallableError,
    RequestTerminated,
    ReservedNameError,
    RouteLoadError,
    ServiceResolutionError,
    SkylarkError,
)
from skylark.http.response import Response
from skylark.server.errors import NOT_FOUND_PAGE, fallback_response, render_error_page


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_type",
        [
            ConfigurationError,
            NotCallableError,
            RequestTerminated,
            ReservedNameError,
            RouteLoadError,
            ServiceResolutionError,
        ],
    )
    def test_all_derive_from_base(self, error_type: type) -> None:
        assert issubclass(error_type, SkylarkError)

    def test_reserved_name_message(self) -> None:
        exc = ReservedNameError("start")
        assert exc.name == "start"
        assert str(exc) == "Cannot override an existing framework method: 'start'"

    def test_service_resolution_message(self) -> None:
        assert str(ServiceResolutionError("db")) == "Cannot resolve service 'db'"
        assert str(ServiceResolutionError("db", "boom")) == "Cannot resolve service 'db': boom"

    def test_request_terminated_carries_response(self) -> None:
        response = Response(status=403)
        assert RequestTerminated(response).response is response


class TestPages:
    def test_not_found_page(self) -> None:
        assert "404 Not Found" in NOT_FOUND_PAGE

    def test_error_page_escapes_message(self) -> None:
        page = render_error_page(ValueError("<script>"))
        assert "&lt;script&gt;" in page
        assert "<pre>" not in page

    def test_fallback_response(self) -> None:
        response = fallback_response(RuntimeError("broken"))
        assert response.status_code == 500
        assert response.sent
        assert "broken" in response.text

    def test_fallback_hides_traceback_outside_debug(self) -> None:
        try:
            raise RuntimeError("broken")
        except RuntimeError as exc:
            quiet = fallback_response(exc)
            verbose = fallback_response(exc, debug=True)
        assert "<pre>" not in quiet.text
        assert "Traceback" in verbose.text
