from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from mydays.errors import MyDaysError, NotFoundError, PaymentConflictError, ValidationError

STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    PaymentConflictError: 409,
}


def status_code_for(exc: MyDaysError) -> int:
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(MyDaysError)
    async def handle_mydays_error(request: Request, exc: MyDaysError) -> JSONResponse:
        return JSONResponse(status_code=status_code_for(exc), content={"detail": str(exc)})
