from fastapi import FastAPI

from gst_invoice.api.routes import health
from gst_invoice.api.v1 import v1_router
from gst_invoice.api.v1.envelope import register_error_handlers
from gst_invoice.core.config import settings
from gst_invoice.core.logging_config import setup_logging


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title="GST Invoice", debug=settings.DEBUG)
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(v1_router)
    return app


app = create_app()
