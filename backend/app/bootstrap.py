"""
Builds the ledgers and the session for one running instance.
The storage backend is picked from settings; ledger logic is the same for both.
"""
import logging
from dataclasses import dataclass

from app.identity.application.session import SessionService
from app.identity.infrastructure.directory import StaticUserDirectory
from app.identity.infrastructure.session_store import JsonFileSessionStore
from app.loans.application.ledger import LoanLedger
from app.loans.infrastructure.json_repository import JsonFileLoanRepository
from app.requests.application.ledger import RequestLedger
from app.requests.infrastructure.json_repository import JsonFilePurchaseRequestRepository
from app.shared.infrastructure.json_store import JsonFileStore
from database.config import TrackerSettings

logger = logging.getLogger(__name__)


@dataclass
class TrackerServices:
    settings: TrackerSettings
    session: SessionService
    loans: LoanLedger
    requests: RequestLedger

    async def load(self) -> None:
        await self.loans.load()
        await self.requests.load()


def build_services(settings: TrackerSettings) -> TrackerServices:
    store = JsonFileStore(settings.store_path)
    directory = StaticUserDirectory()
    session = SessionService(directory, JsonFileSessionStore(store))

    if settings.storage_backend == "sql":
        from app.loans.infrastructure.sqlalchemy_repository import SqlAlchemyLoanRepository
        from app.requests.infrastructure.sqlalchemy_repository import (
            SqlAlchemyPurchaseRequestRepository,
        )
        from database import get_session_maker

        session_maker = get_session_maker(settings)
        loans = LoanLedger(SqlAlchemyLoanRepository(session_maker))
        requests = RequestLedger(SqlAlchemyPurchaseRequestRepository(session_maker))
    elif settings.storage_backend == "json":
        loans = LoanLedger(JsonFileLoanRepository(store))
        requests = RequestLedger(JsonFilePurchaseRequestRepository(store))
    else:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

    logger.info(f"Using {settings.storage_backend} storage backend")
    return TrackerServices(
        settings=settings,
        session=session,
        loans=loans,
        requests=requests,
    )
