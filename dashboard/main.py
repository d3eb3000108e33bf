import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from .api.router import api_router
from .core.config import get_settings
from .core.logging import configure_logging
from .features.gateway import DashboardGateway, GatewayConfig
from .features.widgets import render_dashboard_page

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    config = GatewayConfig.from_settings(settings)
    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = DashboardGateway(config)
    logger.info(
        "Dashboard gateway ready (documents=%s, agent_manager=%s, mock=%s).",
        config.document_api_url,
        config.agent_manager_api_url,
        config.use_mock_data,
    )
    try:
        yield
    finally:
        gateway = app.state.gateway
        app.state.gateway = None
        await gateway.aclose()


app = FastAPI(title="Agent Dashboard", docs_url="/api/docs", lifespan=lifespan)
app.include_router(api_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", response_class=HTMLResponse)
async def read_root() -> HTMLResponse:
    return HTMLResponse(
        content=render_dashboard_page(settings.default_user_id),
        headers={"Cache-Control": "no-store, max-age=0"},
    )


@app.get("/health")
async def health_check() -> dict:
    return {"healthy": True, "mock_mode": settings.use_mock_data}
