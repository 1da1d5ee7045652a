"""HTTP mapping for ordering errors not covered by Protean's FastAPI handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ordering.access import AccessDenied
from ordering.order.exceptions import CheckoutRejected


async def _checkout_rejected_handler(request: Request, exc: CheckoutRejected) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.messages},
    )


async def _access_denied_handler(request: Request, exc: AccessDenied) -> JSONResponse:
    return JSONResponse(status_code=403, content={"error": "forbidden", "detail": exc.message})


def register_ordering_exception_handlers(app: FastAPI) -> None:
    """Install handlers for checkout rejections (4xx with a reason code) and access denials (403).

    Starlette resolves handlers along the exception's MRO, so these take
    precedence over the generic ``ValidationError`` handler for subclasses.
    """
    app.add_exception_handler(CheckoutRejected, _checkout_rejected_handler)
    app.add_exception_handler(AccessDenied, _access_denied_handler)
