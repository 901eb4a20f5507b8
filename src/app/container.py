"""
Service Container
Wires settings, the database, the event bus, the broadcaster and the services
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from redis.asyncio import Redis

import billing.infrastructure.models  # noqa: F401  (registers billing tables)
import courses.infrastructure.models  # noqa: F401  (registers course tables)
from billing.application.services import (
    InvoiceQueryService,
    InvoicingService,
    PaymentService,
    PricingCatalogService,
)
from billing.infrastructure.adapters import InvoiceNotifier
from courses.application.services import (
    AttendanceService,
    AvailabilityService,
    CourseQueryService,
    LifecycleService,
)
from courses.infrastructure.adapters import UnitOfWorkFactory, course_uow_factory
from realtime.broadcaster import EventBroadcaster
from realtime.handlers import register_realtime_handlers
from realtime.redis_relay import RedisEventRelay
from realtime.registry import ConnectionRegistry, InMemoryConnectionRegistry
from shared.config import Settings
from shared.infrastructure.database import DatabaseSessionFactory
from shared.infrastructure.messaging import EventBus
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Container:
    settings: Settings
    database: DatabaseSessionFactory
    uow_factory: UnitOfWorkFactory
    event_bus: EventBus
    broadcaster: EventBroadcaster
    lifecycle: LifecycleService
    attendance: AttendanceService
    availability: AvailabilityService
    course_queries: CourseQueryService
    pricing_catalog: PricingCatalogService
    invoicing: InvoicingService
    payments: PaymentService
    invoice_queries: InvoiceQueryService
    redis: Optional[Redis] = None
    relay: Optional[RedisEventRelay] = None

    async def start(self) -> None:
        if self.settings.auto_create_schema:
            await self.database.create_schema()
        if self.settings.redis_url:
            self.redis = Redis.from_url(self.settings.redis_url, decode_responses=True)
            self.relay = RedisEventRelay(self.redis, self.settings.realtime_channel, self.broadcaster.deliver)
            await self.relay.start()
            self.broadcaster.attach_relay(self.relay)
        logger.info("container_started", relay=self.relay is not None)

    async def stop(self) -> None:
        if self.relay is not None:
            self.broadcaster.attach_relay(None)
            await self.relay.stop()
            self.relay = None
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
        await self.database.dispose()
        logger.info("container_stopped")


def build_container(
    settings: Settings,
    *,
    clock: Callable[[], date] = date.today,
    notifier: Optional[InvoiceNotifier] = None,
    registry: Optional[ConnectionRegistry] = None,
) -> Container:
    database = DatabaseSessionFactory(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    uow_factory = course_uow_factory(database.session_factory)
    event_bus = EventBus()
    broadcaster = EventBroadcaster(registry or InMemoryConnectionRegistry())
    register_realtime_handlers(event_bus, broadcaster)

    return Container(
        settings=settings,
        database=database,
        uow_factory=uow_factory,
        event_bus=event_bus,
        broadcaster=broadcaster,
        lifecycle=LifecycleService(uow_factory, event_bus, clock=clock),
        attendance=AttendanceService(uow_factory, event_bus),
        availability=AvailabilityService(uow_factory, clock=clock),
        course_queries=CourseQueryService(uow_factory),
        pricing_catalog=PricingCatalogService(uow_factory),
        invoicing=InvoicingService(uow_factory, event_bus, notifier=notifier, clock=clock),
        payments=PaymentService(uow_factory, clock=clock),
        invoice_queries=InvoiceQueryService(uow_factory, clock=clock),
    )
