# recipebook API entry point
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .db import init_db
from .exceptions import RecipeBookError
from .settings import settings
from .routers.ready import router as ready_router
from .routers.recipes import router as recipes_router
from .routers.categories import router as categories_router
from .routers.ingredients import router as ingredients_router

# Configure structured logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("recipebook")

# Rate limiter (per-IP)
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("recipebook API ready")
    yield


app = FastAPI(title="recipebook API", version="0.1.0", lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RecipeBookError)
async def recipebook_error_handler(request: Request, exc: RecipeBookError):
    return JSONResponse(status_code=exc.status_code, content=exc.as_dict())


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ready_router, tags=["ready"])
app.include_router(categories_router)
app.include_router(ingredients_router)
app.include_router(recipes_router)
