from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os

import config
from database.connection import engine, Base
import models  # noqa: F401 - registers every table on Base.metadata
from routes import admin, claims, qr_codes
from services.errors import ClaimError

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title="POAP QR Claim API",
    description="QR code provisioning, assignment and claiming for POAP events",
    version="1.0.0"
)

allowed_origins = [
    "https://app.poap.xyz",
    "http://localhost:3000",
]

# In development, allow localhost with any port
if config.ENVIRONMENT == "development":
    allowed_origins.append("http://localhost:*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(ClaimError)
async def claim_error_handler(request: Request, exc: ClaimError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    content = {"detail": exc.detail}
    if exc.qr_hashes:
        content["qr_hashes"] = exc.qr_hashes
    return JSONResponse(status_code=exc.status_code, content=content)


app.include_router(claims.router, tags=["Actions"])
app.include_router(qr_codes.router, tags=["Qr-claims"])
app.include_router(admin.router, tags=["Admin"])


@app.get("/")
def root():
    """Root endpoint"""
    return {"message": "POAP QR Claim API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", 8000))
    uvicorn.run("main:app", host=host, port=port, reload=True)
