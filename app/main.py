from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi import Request
from app.core.config import API_TITLE
from app.routers import device_stats

app = FastAPI(title=API_TITLE)

app.include_router(device_stats.router)

@app.get("/")
def root():
    return {"status": "SIWATT stats backend running"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}

    for err in exc.errors():
        loc = err["loc"]
        # a missing or unparsable body has no field to report against
        field = loc[-1] if len(loc) > 1 else "body"
        errors[field] = err["msg"]

    return JSONResponse(
        status_code=422,
        content={
            "code": 422,
            "message": "Validation error",
            "errors": errors
        }
    )
