"""CORS middleware whose preflight answer is a bare 200."""

from fastapi import Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers

# Recomputed by Response for the empty body.
_BODY_HEADERS = ("content-length", "content-type")


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """Starlette's CORS handling, but preflights get status 200 and no body.

    Callers only read the ``Access-Control-Allow-*`` headers, so every
    preflight answers 200.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers=request_headers)
        headers = {
            k: v for k, v in response.headers.items() if k.lower() not in _BODY_HEADERS
        }
        return Response(status_code=200, headers=headers)
