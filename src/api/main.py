"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.dependencies import api_key_protection, get_config
from src.api.endpoints.intake import intake_api
from src.api.endpoints.users import users_api
from src.error_handler import ErrorHandler

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="CRM Intake API",
    description="Contact intake form backend: writes submissions to Monday.com and Resend",
    version="1.0.0",
    dependencies=[Depends(api_key_protection)],  # protect everything by default
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

error_handler = ErrorHandler()

app.include_router(intake_api, prefix="/api/v1")
app.include_router(users_api, prefix="/api/v1")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    body = error_handler.handle_exception(exc, context={"path": request.url.path, "method": request.method})
    return JSONResponse(status_code=500, content=body)


@app.get("/health", tags=["Health"])
async def health_check():
    cfg = get_config()
    return {
        "status": "ok",
        "integrations_mode": "real" if cfg.use_real_integrations() else "mock",
        "timestamp": datetime.now().isoformat(),
    }
