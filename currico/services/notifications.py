"""
Currico - In-app Notifications

Creates notification rows for a user. Seller-facing copy is German, the
marketplace's default locale.

Callers run these through BackgroundDispatcher, so a failing insert is
logged there and never reaches the request that triggered it.
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from currico.config import NotificationType, settings
from currico.engine.levels import LevelDefinition
from currico.models.notification import Notification

logger = structlog.get_logger(__name__)


def level_display_name(level: LevelDefinition) -> str:
    return level.name.capitalize()


class NotificationService:
    """Writes notifications in their own session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_notification(
        self,
        user_id: uuid.UUID,
        title: str,
        body: str | None = None,
        link: str | None = None,
        type: NotificationType = NotificationType.SYSTEM,
    ) -> uuid.UUID:
        """
        Persist a notification.

        Returns:
            The new notification's id.
        """
        async with self._session_factory() as session:
            notification = Notification(
                user_id=user_id,
                type=type.value,
                title=title,
                body=body,
                link=link,
            )
            session.add(notification)
            await session.commit()

        logger.info(
            "notification_created",
            user_id=str(user_id),
            notification_id=str(notification.id),
            type=type.value,
            title=title,
        )
        return notification.id

    async def notify_seller_verified(self, user_id: uuid.UUID) -> uuid.UUID:
        """Automatic verified-seller grant."""
        return await self.create_notification(
            user_id,
            title="Sie sind jetzt verifizierter Verkäufer",
            body=(
                "Herzlichen Glückwunsch! Ihr Konto erfüllt alle Kriterien und "
                "trägt nun das Verifizierungsabzeichen."
            ),
            link=settings.NOTIFICATION_ACCOUNT_LINK,
        )

    async def notify_manual_verification(self, user_id: uuid.UUID) -> uuid.UUID:
        return await self.create_notification(
            user_id,
            title="Verkäufer-Verifizierung bestätigt",
            body=(
                "Ihr Konto wurde manuell als verifizierter Verkäufer freigeschaltet. "
                "Sie erhalten nun das Verifizierungsabzeichen."
            ),
            link=settings.NOTIFICATION_ACCOUNT_LINK,
        )

    async def notify_level_up(
        self, user_id: uuid.UUID, level: LevelDefinition
    ) -> uuid.UUID:
        name = level_display_name(level)
        return await self.create_notification(
            user_id,
            title=f"Neue Verkäuferstufe erreicht: {name}",
            body=f"Sie haben die Stufe {name} (Level {level.level}) erreicht. Weiter so!",
            link=settings.NOTIFICATION_ACCOUNT_LINK,
        )
