"""RunningHub Bridge API - workflow tools for the chat orchestration layer.

This API exposes tools that run remote RunningHub workflows:
- Tool definitions (name, description, parameters)
- Tool invocation (create task, poll to completion, return text output)
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src import __version__
from src.api.routes import tools
from src.runninghub.transport import RunningHubTransport
from src.tools.registry import get_tool_registry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: one transport (and connection pool) shared by all tool calls
    transport = RunningHubTransport()
    app.state.runninghub_transport = transport
    logger.info(f"RunningHub transport ready ({transport.base_url})")

    tool_registry = get_tool_registry()
    logger.info(f"Loaded {tool_registry.count()} tools")

    logger.info("RunningHub Bridge API ready")
    yield
    # Shutdown
    transport.close()
    logger.info("Shutting down RunningHub Bridge API")


# Create FastAPI app
app = FastAPI(
    title="RunningHub Bridge API",
    description="""
## Workflow Tools

Runs RunningHub workflows on behalf of a chat model and returns their text
output.

### Key Endpoints

- `GET /v1/tools` - List all tools
- `GET /v1/tools/{name}` - Get a tool definition
- `POST /v1/tools/{name}` - Invoke a tool
""",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with /v1 prefix
app.include_router(tools.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "RunningHub Bridge API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "tools": "/v1/tools",
            "health": "/health",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "tools_loaded": get_tool_registry().count(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8001")),
        reload=True,
    )
