# contact_relay/main.py
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact_relay.core.errors import install_error_handlers
from contact_relay.core.mailer import Mailer, build_mailer
from contact_relay.core.settings import Settings, load_settings
from contact_relay.routers.contact import router as contact_router
from contact_relay.routers.pages import router as pages_router

log = logging.getLogger("uvicorn.error")


def create_app(settings: Optional[Settings] = None, mailer: Optional[Mailer] = None) -> FastAPI:
    settings = settings or load_settings()
    if mailer is None:
        mailer = build_mailer(settings)

    app = FastAPI(title=settings.api_title)
    app.state.settings = settings
    app.state.mailer = mailer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    # Catch-all goes last so it only sees unmatched paths
    app.include_router(contact_router)
    app.include_router(pages_router)

    log.info(f"[main] public_root = {settings.public_root}, mail enabled = {mailer is not None}")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
