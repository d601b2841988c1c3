"""Error and not-found pages.

Plain f-strings and ``html.escape`` only, so a broken template setup
cannot prevent error reporting. ``fallback_response`` is the last
resort when building the regular 500 response failed; it touches no
registry or service.
"""

import html
import traceback

from skylark.http.response import Response

NOT_FOUND_PAGE = (
    "<h1>404 Not Found</h1>"
    "<h3>The page you have requested could not be found.</h3>"
)


def _describe(exc: BaseException) -> str:
    message = str(exc) or type(exc).__name__
    return html.escape(message)


def _trace(exc: BaseException) -> str:
    return html.escape("".join(traceback.format_exception(exc)))


def render_error_page(exc: BaseException, *, debug: bool = False) -> str:
    """500 page with the error message, plus the traceback in debug mode."""
    body = f"<h1>500 Internal Server Error</h1><h3>{_describe(exc)}</h3>"
    if debug:
        body += f"<pre>{_trace(exc)}</pre>"
    return body


def fallback_response(exc: BaseException, *, debug: bool = False) -> Response:
    """Static 500 response for failures raised while producing a 500."""
    body = render_error_page(exc, debug=debug)
    response = Response(body, status=500)
    response.sent = True
    return response
