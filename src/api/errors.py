"""
Registry error translation - ErrorCode to HTTP response mapping.

Routes unwrap domain results; a failed result raises RegistryError, which
the handler installed here turns into ``{"detail": ..., "code": ...}`` with
a status chosen per error code.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import RegistryError
from src.domain.ports import ErrorCode

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.NOT_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.CHARITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CHARITY_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.AUTHORITY_NOT_VERIFIED: status.HTTP_409_CONFLICT,
    ErrorCode.AUTHORITY_ALREADY_SET: status.HTTP_409_CONFLICT,
    ErrorCode.MAX_CHARITIES_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.TRANSFER_FAILED: status.HTTP_402_PAYMENT_REQUIRED,
}


def status_for(code: ErrorCode) -> int:
    """HTTP status for an error code; field validation failures are 400."""
    return STATUS_BY_CODE.get(code, status.HTTP_400_BAD_REQUEST)


def error_detail(code: ErrorCode) -> str:
    """Human-readable detail, e.g. INVALID_PROOF_HASH -> 'Invalid proof hash'."""
    return code.name.replace("_", " ").capitalize()


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc.code),
        content={"detail": error_detail(exc.code), "code": int(exc.code)},
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register the RegistryError handler on an application."""
    app.add_exception_handler(RegistryError, registry_error_handler)  # type: ignore[arg-type]
