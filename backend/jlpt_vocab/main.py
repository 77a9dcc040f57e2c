from fastapi import FastAPI

from .api.routes_status import router as status_router
from .api.routes_vocab import router as vocab_router
from .config import settings
from .core.database import Base, engine
from .logging import configure_logging, logger


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
)


@app.on_event("startup")
def startup_event():
    configure_logging()

    # Create tables
    Base.metadata.create_all(bind=engine)
    logger.info("startup_complete", environment=settings.environment)


app.include_router(status_router)
app.include_router(vocab_router)
