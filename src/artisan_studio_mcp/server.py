"""Main FastMCP server — mounts all sub-servers."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import tracing
from .client import GeminiClient
from .tools.assistance import assistance_server
from .tools.campaign import campaign_server
from .tools.images import image_server
from .tools.infra import infra_server
from .tools.pricing import pricing_server
from .tools.product import product_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook — tracing setup, then teardown of shared Gemini clients."""
    tracing.setup()
    yield {}
    closed = await GeminiClient.close_all()
    tracing.shutdown()
    logger.info("Lifespan shutdown: closed %d client(s)", closed)


app = FastMCP(
    "artisan-studio",
    instructions=(
        "Marketing studio for artisans — photo enhancement, festival images, "
        "product listings, campaign copy, festival videos, pricing and mentor advice "
        "(market trends, design feedback, ad ideas, captions, listing copy). "
        "Powered by Gemini and Veo."
    ),
    lifespan=_lifespan,
)

app.mount(image_server)
app.mount(product_server)
app.mount(campaign_server)
app.mount(pricing_server)
app.mount(assistance_server)
app.mount(infra_server)


def main() -> None:
    """Entry-point for ``artisan-studio-mcp`` console script."""
    app.run()


if __name__ == "__main__":
    main()
