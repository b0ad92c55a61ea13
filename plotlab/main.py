from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from plotlab import __version__
from plotlab.api.router import api_router
from plotlab.config import settings
from plotlab.logging_config import setup_logging
from plotlab.session_store import store


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(
        title="plotlab",
        version=__version__,
        description="seaborn chart rendering: pair plots, in-plot aggregation, "
                    "correlation heatmaps and matplotlib customization",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/health")
    async def health():
        return {"ok": True, "version": __version__, **store.get_stats()}

    return app


app = create_app()
