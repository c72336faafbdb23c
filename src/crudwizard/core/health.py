"""Health check endpoint with database validation."""

import time
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.crudwizard.core.db import Database


def setup_health_endpoint(app: FastAPI) -> None:
    """Configure the health check endpoint."""

    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        """Report whether the database answers a trivial query."""
        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "timestamp": time.time(),
        }

        database: Database | None = getattr(request.app.state, "database", None)
        if database is None:
            health_status["database"] = "not_initialized"
            health_status["status"] = "unhealthy"
        else:
            try:
                async with database.session() as session:
                    await session.execute(text("SELECT 1"))
                health_status["database"] = "healthy"
            except (OSError, SQLAlchemyError) as e:
                health_status["database"] = f"unhealthy: {str(e)}"
                health_status["status"] = "unhealthy"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)
