"""
Lexora API Module
=================
FastAPI routers for the Lexora API.
"""

from api.analyze import router as analyze_router
from api.chat import router as chat_router
from api.upload import router as upload_router

__all__ = ["upload_router", "analyze_router", "chat_router"]
