"""FastAPI application entry point for the earnings dashboard API."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.clients.backend.BackendClientManager import BackendClientManager
from shared.models.errors import BackendError
from server.core.AnalyticsService import AnalyticsService
from server.core.AuthGate import AuthGate
from server.routers.AuthRouter import router as auth_router
from server.routers.FlowsRouter import router as flows_router
from server.routers.EarningsRouter import router as earnings_router
from server.routers.AnalyticsRouter import router as analytics_router

logging = setup_logging()
app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # when the app starts
    app.state.logging = logging
    app.state.helper_config = HelperConfig(logger=logging)

    backend_client = BackendClientManager(helper_config=app.state.helper_config).get_client()
    await backend_client.boot()
    app.state.backend_client = backend_client
    app.state.auth_gate = AuthGate(helper_config=app.state.helper_config)
    app.state.analytics_service = AnalyticsService(
        helper_config=app.state.helper_config,
        backend_client=backend_client,
    )

    await check_connection(backend_client)

    # while the app is running...
    yield

    # when the app shuts down, close the backend connection
    logging.info("Shutting down, closing backend client...")
    await backend_client.close()
    logging.info("Backend client closed.")


async def check_connection(backend_client) -> None:
    """Check connectivity to the backend on startup.

    Failures are non-fatal: the dashboard stays up and every table reports
    the error on its own until the backend becomes reachable.
    """
    try:
        result: httpx.Response = await backend_client.do_healthcheck()
    except BackendError as e:
        logging.warning("Backend is not reachable: %s. Tables will show errors until it is.", e.message)
        return
    if not result.is_success:
        logging.warning("Backend healthcheck returned status %d.", result.status_code)
    else:
        logging.info("Backend client '%s' is reachable.", backend_client.get_engine_name(), color="green")


def create_app(lifespan_handler: Callable | None = lifespan) -> FastAPI:
    """Build the FastAPI application with all routers attached.

    Args:
        lifespan_handler: Startup/shutdown handler wiring app.state. Pass None to wire the state yourself.
    """
    app = FastAPI(
        title="earnings_dashboard",
        description=(
            "Administrative dashboard API for user and weekly earnings records. "
            "Proxies filtered list and delete requests to the earnings backend "
            "and serves aggregated earnings statistics."
        ),
        version=app_version,
        lifespan=lifespan_handler,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(flows_router)
    app.include_router(earnings_router)
    app.include_router(analytics_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.info(
        "Starting earnings_dashboard API Server v%s from root dir: %s on port 8000...",
        app_version,
        os.environ.get("ROOT_DIR", os.getcwd()),
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
