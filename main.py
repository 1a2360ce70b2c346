"""
Main application entry point for the Review API.

This module initializes the FastAPI application, configures logging and
CORS, creates the database tables on startup, registers the 400 handler
for malformed requests and includes the routers for contacts, users,
restaurants and reviews.

Modules:
- FastAPI: Web framework
- CORSMiddleware: Middleware for handling CORS
- review_api.database: Database engine
- review_api.models: SQLAlchemy models
- review_api.contacts / users / restaurants / reviews: Routers
- review_api.core: Application settings
- review_api.logger: Loguru configuration
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from review_api import contacts, models, restaurants, reviews, users
from review_api.core import get_settings
from review_api.database import engine
from review_api.logger import configure_logging
from review_api.responses import request_validation_handler

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Configures logging and creates any missing tables before the first
    request is served.
    """
    configure_logging(settings)
    models.Base.metadata.create_all(bind=engine)
    logger.info("{} started", settings.APP_NAME)
    yield
    logger.info("{} stopped", settings.APP_NAME)


# Initialize FastAPI application
app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)

# Include routers for application areas
app.include_router(contacts.router)
app.include_router(users.router)
app.include_router(restaurants.router)
app.include_router(reviews.router)


@app.get("/")
def root():
    """
    Root endpoint for the API.

    Returns a simple JSON message directing users to the Swagger UI.

    Returns:
        dict: JSON message with information about the API
    """
    return {"msg": f"{settings.APP_NAME}. Visit /docs for Swagger UI"}
