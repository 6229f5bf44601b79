"""
FastAPI application entry point.

Assembles the FastAPI app with the analysis, paper, knowledge and theory
lab routers.
"""

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from analyzer.graph.analysis_api import router as analysis_router
from analyzer.knowledge.knowledge_api import router as knowledge_router
from analyzer.papers.papers_api import router as papers_router
from analyzer.shared.errors import UnknownAgentError, ValidationError
from analyzer.shared.logging.config import setup_logging
from analyzer.theory_lab.theory_lab_api import router as theory_lab_router


# ============================================================================
# Logging configuration (single source of truth for all modules)
# ============================================================================
# ANALYZER_LOG_FORMAT=json switches to JSON lines
setup_logging(
    level=logging.INFO,
    json_output=os.getenv("ANALYZER_LOG_FORMAT", "text").lower() == "json",
)


# Create FastAPI app
app = FastAPI(
    title="Paper Analyzer",
    description="Multi-agent research paper feedback with live streaming",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


@app.exception_handler(UnknownAgentError)
async def unknown_agent_handler(request: Request, exc: UnknownAgentError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
    )


# Include routers
app.include_router(analysis_router)
app.include_router(papers_router)
app.include_router(knowledge_router)
app.include_router(theory_lab_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Paper Analyzer",
        "version": "0.1.0",
        "endpoints": {
            "analysis": "/api/analysis",
            "stream": "/api/analysis/stream",
            "papers": "/api/papers",
            "knowledge": "/api/knowledge",
            "theory_lab": "/api/chat/theory-lab",
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
