import logging
import time

import secure
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .routers import categories, signin, transactions

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Tables are managed by Alembic (`alembic upgrade head`), never at startup.
app = FastAPI(title="Simple Budget API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

secure_headers = secure.Secure.with_default_headers()

app.include_router(categories.router)
app.include_router(transactions.router)
app.include_router(signin.router)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    await secure_headers.set_headers_async(response)
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    if config.is_production():
        logger.info("%s %s %s", request.method, request.url.path, response.status_code)
    else:
        elapsed_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s %s %s %.1fms", client, request.method, request.url.path, response.status_code, elapsed_ms
        )
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report the first invalid field as a 400 instead of FastAPI's 422."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or "body"
        detail = f"{field}: {first.get('msg', 'invalid value')}"
    else:
        detail = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if config.is_production():
        content = {"error": {"message": "server error"}}
    else:
        content = {"message": str(exc), "error": type(exc).__name__}
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@app.get("/")
def root():
    return {
        "message": "Simple Budget API is running!",
        "endpoints": {
            "categories": "/api/categories",
            "transactions": "/api/transactions",
            "signin": "/api",
        },
    }


@app.get("/health")
def health_check():
    return {"status": "ok"}


def run():
    uvicorn.run("simple_budget.main:app", host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
