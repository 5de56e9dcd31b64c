"""
bylawcheck FastAPI Server

Thin HTTP layer over BylawComplianceService.

Endpoints:
- POST /api/checkCompliance - Evaluate a project row against the bylaws
- POST /api/askBylaw - Answer a free-text bylaw question
- GET /api/health - Liveness check
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging

from fastapi import Body, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import uvicorn

from bylawcheck.config.settings import Settings, get_settings
from bylawcheck.exceptions import InvalidInput
from bylawcheck.service import BylawComplianceService

logger = logging.getLogger(__name__)


# ===== Pydantic Models =====

class AskBylawRequest(BaseModel):
    """Bylaw question request."""
    question: Optional[str] = None
    context: Optional[Dict[str, Any]] = None


def _error(status_code: int, message: str, details: Optional[str] = None) -> JSONResponse:
    content = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


# ===== Application Factory =====

def create_app(
    service: Optional[BylawComplianceService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    service = service or BylawComplianceService.from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        description="Bylaw compliance checks and bylaw Q&A for building projects",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Handlers are sync so the blocking knowledge-service call runs in the
    # thread pool and requests stay independent.

    @app.post("/api/checkCompliance", tags=["Compliance"])
    def check_compliance(row: Dict[str, Any] = Body(...)):
        """Evaluate one project row. Resolver degradation still returns 200."""
        try:
            report = service.check_compliance(row)
        except InvalidInput as e:
            return _error(400, str(e))
        except Exception as e:
            logger.exception("Compliance check error")
            return _error(500, "Internal server error during compliance check", str(e))
        return report.model_dump(mode="json")

    @app.post("/api/askBylaw", tags=["Bylaws"])
    def ask_bylaw(request: AskBylawRequest):
        """Answer a bylaw question; failures degrade to a canned answer."""
        try:
            answer = service.ask_bylaw(request.question, request.context)
        except InvalidInput as e:
            return _error(400, str(e))
        except Exception as e:
            logger.exception("Ask bylaw error")
            return _error(500, "Internal server error during bylaw query", str(e))
        return answer.model_dump(mode="json")

    @app.get("/api/health", tags=["System"])
    def health_check() -> Dict[str, str]:
        """Health check endpoint."""
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None):
    """Run the server."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    app = create_app(settings=settings)
    logger.info(f"API server running on port {port or settings.api_port}")
    uvicorn.run(app, host=host or settings.api_host, port=port or settings.api_port)


if __name__ == "__main__":
    run_server()
