from collections.abc import Generator

from sqlalchemy.orm import Session

from artistshield.core.config import get_settings
from artistshield.db.session import SessionLocal
from artistshield.services.mailer import build_mailer
from artistshield.services.search import SearchOrchestrator, build_search_orchestrator
from artistshield.services.split_sheet import SplitSheetNotifier


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_search_orchestrator() -> SearchOrchestrator:
    """Raises ConfigurationError (HTTP 500) when Firecrawl is not configured."""
    return build_search_orchestrator(get_settings())


def get_split_sheet_notifier() -> SplitSheetNotifier:
    """Raises ConfigurationError (HTTP 500) when Resend is not configured."""
    return SplitSheetNotifier(build_mailer(get_settings()))
