# services/diagnostics_service.py
import logging
from typing import Any, Dict

from core.api_client import api_client, ApiError

logger = logging.getLogger(__name__)

CHECKED_ENDPOINTS = ["/users/", "/fund-requests/", "/payments/"]


class DiagnosticsService:

    @staticmethod
    def check_endpoint(path: str) -> Dict[str, Any]:
        try:
            data = api_client.get(path) or []
            return {
                "status": "success",
                "count": len(data) if isinstance(data, list) else 0,
                "sample": data[0] if isinstance(data, list) and data else None,
            }
        except ApiError as e:
            logger.warning(f"Diagnostics check failed for {path}: {e}")
            return {"status": "failed", "error": str(e)}

    @staticmethod
    def test_all_endpoints() -> Dict[str, Any]:
        """Hit each list endpoint with the current credentials and report what came back."""
        endpoints = {
            f"GET /api{path}": DiagnosticsService.check_endpoint(path)
            for path in CHECKED_ENDPOINTS
        }
        return {"status": "complete", "endpoints": endpoints}
