from contextlib import asynccontextmanager

from fastapi import FastAPI

from moodjournal.api.endpoints import router
from moodjournal.api.routes import health
from moodjournal.core.tracing import instrument_app, instrument_httpx, setup_tracing, shutdown_tracing
from moodjournal.services.http_client import http_client_manager
from moodjournal.shared.correlation import CorrelationMiddleware
from moodjournal.shared.errors import register_exception_handlers
from moodjournal.shared.logging_config import setup_logging

SERVICE_NAME = "mood-journal"

setup_logging(service_name=SERVICE_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_tracing(SERVICE_NAME)
    instrument_httpx()
    await http_client_manager.startup()
    yield
    await http_client_manager.shutdown()
    shutdown_tracing()


app = FastAPI(
    title="Mood Journal",
    description="Mood check-ins, trend analytics and AI reflections",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationMiddleware)
register_exception_handlers(app)
instrument_app(app)

app.include_router(router, prefix="/api/v1")
app.include_router(health.router)


@app.get("/")
async def root():
    return {"message": "Mood Journal Running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
