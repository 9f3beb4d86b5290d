"""Last-resort error shaping for API routes."""
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in intake API: %s (context=%s)", exc, context or {}, exc_info=exc)
        return {
            "success": False,
            "error_message": "An internal error occurred while processing your request. Please try again later.",
        }
