"""
FastAPI application entry point.

Hosts the webhook receiver for deployments that run the bot as a service
instead of as a workflow step.
"""

from fastapi import FastAPI

from nightly_link_bot import __version__
from nightly_link_bot.api import webhooks
from nightly_link_bot.config import settings
from nightly_link_bot.utils.logging import setup_logging, get_logger

# Configure structured logging
setup_logging(settings.log_level)

logger = get_logger(__name__)

app = FastAPI(
    title="Nightly Link Bot",
    description="Links workflow run artifacts from pull request descriptions",
    version=__version__
)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Nightly Link Bot API",
        "version": __version__,
        "docs": "/docs"
    }


app.include_router(webhooks.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
