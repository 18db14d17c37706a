import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
import httpx
import redis.asyncio as redis

from partner_app.core.app_state import build_app_state
from partner_app.core.config import settings
from .routers import restaurant, delivery, session

# Configure Logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG_MODE else logging.INFO,
    format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s",
    handlers=[
        logging.FileHandler(settings.LOG_FILE),
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)


# Lifespan events
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Partner app starting up...")

    app.state.http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
    logger.info(f"HTTP client initialized for {settings.API_BASE_URL}.")

    # Redis holds the device-local storage (token, persisted store state)
    try:
        app.state.redis_client = redis.from_url(
            settings.REDIS_HOST,
            decode_responses=True
        )
        await app.state.redis_client.ping()
        logger.info("Successfully connected to Redis.")
    except Exception as e:
        logger.error(f"Error connecting to Redis: {e}")
        app.state.redis_client = None

    app.state.partner = build_app_state(app.state.http_client, app.state.redis_client)
    await app.state.partner.hydrate()
    logger.info("Partner stores restored. Startup complete.")
    yield

    await app.state.partner.shutdown()
    await app.state.http_client.aclose()
    if app.state.redis_client:
        await app.state.redis_client.aclose()
        logger.info("Redis connection closed.")
    logger.info("Resources cleaned up. Application shutting down.")


# FastAPI App
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def read_root():
    logger.info("Root endpoint accessed.")
    return {"message": f"Welcome to {settings.APP_NAME}!"}


# Routers
app.include_router(session.router, prefix="/session", tags=["session"])
app.include_router(restaurant.router, prefix="/restaurant", tags=["restaurant"])
app.include_router(delivery.router, prefix="/delivery", tags=["delivery"])
