from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import uuid
from contextlib import asynccontextmanager
from database import database

from developeer import __product__, __version__
from developeer.errors import DeveloperError
from developeer.routes import auth_router, forms_router, reviews_router, users_router
from developeer.validation import validation_error_from_errors

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Lifespan context manager for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Developeer API")
    await database.connect()
    
    yield
    
    # Shutdown
    logger.info("Shutting down Developeer API")
    await database.close()

# Create FastAPI app
app = FastAPI(
    title="Developeer API",
    description="Peer review exchange for developer projects",
    version=__version__,
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=os.environ.get('CORS_ORIGINS', '*').split(','),
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(forms_router)
app.include_router(reviews_router)

# Root endpoint
@app.get("/api")
async def root():
    return {
        "service": __product__,
        "tagline": "Peer review exchange for developer projects",
        "version": __version__,
        "status": "operational"
    }

# Health check
@app.get("/api/health")
async def health_check():
    return {
        "status": "healthy",
        "environment": os.getenv("ENVIRONMENT", "development")
    }

# Domain errors: {code, reason, message, location?}
@app.exception_handler(DeveloperError)
async def developer_error_handler(request: Request, exc: DeveloperError):
    if exc.status_code >= 500:
        logger.error(f"{exc.reason} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

# Body parsing errors are reported in the same shape as domain validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    request_id = str(uuid.uuid4())
    errors = exc.errors()
    logger.warning(
        "Request validation failed request_id=%s path=%s errors=%s",
        request_id,
        request.url.path,
        [(e.get("loc"), e.get("msg"), e.get("type")) for e in errors],
    )
    error = validation_error_from_errors(errors)
    return JSONResponse(
        status_code=error.status_code,
        content={**error.to_dict(), "request_id": request_id},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "server:app",
        host="0.0.0.0",
        port=8001,
        reload=os.getenv("ENVIRONMENT") == "development"
    )
