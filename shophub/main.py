# shophub/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from sqlalchemy.engine import Engine

from shophub.api.errors import setup_error_handlers
from shophub.api.middleware import RequestLoggingMiddleware
from shophub.api.routers import auth, cart, checkout, health, home, products
from shophub.data.database import create_db_engine, create_session_factory, init_db
from shophub.data.seed import seed
from shophub.utils.logging import get_logger, setup_logging
from shophub.utils.settings import LOG_LEVEL, SEED_SAMPLE_DATA, SERVICE_NAME

logger = get_logger(__name__)


def create_app(
    database_url: str | None = None,
    seed_data: bool = SEED_SAMPLE_DATA,
    engine: Engine | None = None,
) -> FastAPI:
    """
    Punkt wejscia: tu powstaje engine i fabryka sesji,
    serwisy dostaja gotowa Session przez Depends(get_db).
    """
    setup_logging(SERVICE_NAME, LOG_LEVEL)

    engine = engine or create_db_engine(database_url)

    logger.info("Inicjalizacja bazy danych")
    init_db(engine)

    session_factory = create_session_factory(engine)

    if seed_data:
        with session_factory() as db:
            seed(db)

    app = FastAPI(
        title="ShopHub API",
        version="1.0.0",
    )
    app.state.engine = engine
    app.state.session_factory = session_factory

    setup_error_handlers(app)

    app.add_middleware(RequestLoggingMiddleware, service_name=SERVICE_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(home.router)
    app.include_router(cart.router)
    app.include_router(checkout.router)

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
