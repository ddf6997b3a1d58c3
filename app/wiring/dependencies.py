from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.ports.notifier import BookingNotifierPort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.use_cases.booking_ledger import BookingLedger
from app.application.use_cases.booking_service import BookingService
from app.application.use_cases.export_bookings import ExportBookingsUseCase
from app.application.use_cases.notify_booking import NotificationDispatcher, NotifyBookingUseCase
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from app.infrastructure.store.json_store import JsonBookingRepository
from app.infrastructure.store.memory_store import MemoryBookingRepository
from app.infrastructure.telegram.mock_notifier import MockNotifier
from app.infrastructure.telegram.telegram_client import TelegramClient
from app.infrastructure.telegram.telegram_notifier import TelegramNotifier


_booking_repository: BookingRepositoryPort | None = None


def get_booking_repository() -> BookingRepositoryPort:
    global _booking_repository
    if _booking_repository is None:
        if settings.STORE_PROVIDER.lower() == "memory":
            _booking_repository = MemoryBookingRepository()
        else:
            _booking_repository = JsonBookingRepository(file_path=settings.BOOKINGS_FILE)
    return _booking_repository


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore()


@lru_cache
def get_notifier() -> BookingNotifierPort:
    logger = logging.getLogger(__name__)
    if not (settings.TELEGRAM_BOT_TOKEN and settings.TELEGRAM_CHAT_ID):
        logger.info("Using MockNotifier (TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID missing)")
        return MockNotifier()

    logger.info("Using TelegramNotifier")
    client = TelegramClient(
        bot_token=settings.TELEGRAM_BOT_TOKEN,
        api_base=settings.TELEGRAM_API_BASE,
        timeout=settings.TELEGRAM_TIMEOUT_SECONDS,
    )
    return TelegramNotifier(client=client, chat_id=settings.TELEGRAM_CHAT_ID)


@lru_cache
def get_notification_dispatcher() -> NotificationDispatcher:
    use_case = NotifyBookingUseCase(notifier=get_notifier(), catalog=get_service_catalog())
    return NotificationDispatcher(use_case, max_workers=settings.NOTIFICATION_WORKERS)


@lru_cache
def get_booking_ledger() -> BookingLedger:
    return BookingLedger(
        repository=get_booking_repository(),
        hooks=[get_notification_dispatcher()],
    )


@lru_cache
def get_booking_service() -> BookingService:
    return BookingService(
        ledger=get_booking_ledger(),
        catalog=get_service_catalog(),
        config=settings.calendar_config(),
        exporter=ExportBookingsUseCase(get_booking_repository()),
    )
