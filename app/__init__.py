from fastapi import FastAPI
from app.api.verification_router import build_router
from app.config.config import Config, ProviderCredentials
from app.core.verification_strategies import TWILIO_VERIFY, VerificationStrategy, select_strategy
from app.helper.verification_helper import VerificationService
from app.utils.logger import setup_logging
import logging

from app.utils.db import Base, engine
from app.models import lead # registers Pharmacy/Employee/Lead tables

logger = logging.getLogger(__name__)

def create_app(credentials: ProviderCredentials = None, strategy: VerificationStrategy = None, create_tables: bool = True):
    setup_logging()
    app = FastAPI(title="Phone Verification Service")

    # credentials are read once, at app creation
    if credentials is None:
        credentials = ProviderCredentials.from_config(Config)
    if strategy is None:
        strategy = select_strategy(credentials)
    logger.info(f"Twilio credentials check: {credentials.describe()}")
    if strategy.method != TWILIO_VERIFY:
        logger.warning("Twilio credentials missing - SMS verification running in DEVELOPMENT MODE")

    service = VerificationService(strategy)
    app.state.verification_service = service
    app.include_router(build_router(service))

    @app.on_event("startup")
    async def startup_event():
        logger.info("Application startup event triggered.")
        if create_tables:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created/checked.")

    @app.get("/")
    async def root():
        return {"message": "Phone Verification Service is running", "method": service.method}

    return app
