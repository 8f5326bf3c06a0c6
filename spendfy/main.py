from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from spendfy import config
from spendfy.db.core import init_db
from spendfy.logging_config import setup_logging, get_logger
from spendfy.routers.auth import router as auth_router
from spendfy.routers.users import router as users_router
from spendfy.routers.accounts import router as accounts_router
from spendfy.routers.categories import router as categories_router
from spendfy.routers.budgets import router as budgets_router
from spendfy.routers.transactions import router as transactions_router

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if config.JWT_SECRET == config.DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is not set; using the development secret")
    init_db()
    logger.info("Spendfy API started")
    yield


app = FastAPI(title="Spendfy API", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed or missing input is a 400, like every other rejected request
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(accounts_router)
app.include_router(categories_router)
app.include_router(budgets_router)
app.include_router(transactions_router)


@app.get("/")
def read_root():
    return "Server is running."
