"""
Restaurant Menu Application

JSON API for a single-restaurant ordering client: login, menu browsing
with staged quantities, and cart editing.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import auth_router, menu_router, cart_router
from .core.config import settings

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"{settings.app_name} starting up...")
    logger.info(f"Menu URL: {settings.menu_url}")

    yield

    logger.info(f"{settings.app_name} shutting down...")
    # Cleanup restaurant client
    from .routes import dependencies
    if dependencies.restaurant_client:
        await dependencies.restaurant_client.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Single-restaurant menu and cart client",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(menu_router)
app.include_router(cart_router)


@app.get("/")
async def home():
    """API index"""
    return {
        "message": f"{settings.app_name} API",
        "docs": "/docs",
        "endpoints": {
            "auth": "/api/auth",
            "menu": "/api/menu",
            "cart": "/api/cart",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "menucart"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "menucart.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
