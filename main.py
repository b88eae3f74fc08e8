# main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging

import paths
from config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL, PORT
from database import init_db
from errors import register_error_handlers
from Services.auth_router import router as auth_router
from Services.car_router import router as car_router
from Services.customer_router import router as customer_router

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

paths.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}", exc_info=True)
        raise
    yield
    logger.info("CAR MART API shutting down")


# Create FastAPI app
app = FastAPI(
    title="CAR MART API",
    description="""
    API for a car dealership including:
    - Car inventory management with image uploads
    - Customer records and purchase history
    - Sold status kept in step with customer purchases
    """,
    version="1.0.0",
    docs_url=f"/{API_PREFIX}/docs",
    redoc_url=f"/{API_PREFIX}/redoc",
    openapi_url=f"/{API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(auth_router, prefix=f"/{API_PREFIX}")
app.include_router(car_router, prefix=f"/{API_PREFIX}")
app.include_router(customer_router, prefix=f"/{API_PREFIX}")

# Uploaded car images
app.mount("/uploads", StaticFiles(directory=paths.UPLOAD_DIR, check_dir=False), name="uploads")


@app.get("/")
async def root():
    return {
        "message": "Welcome to CAR MART",
        "version": "1.0.0",
        "docs_url": f"/{API_PREFIX}/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT, log_level=LOG_LEVEL.lower())
