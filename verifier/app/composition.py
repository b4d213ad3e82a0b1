"""
Composition root: single place where concrete implementations are wired.

Builds settings, property source, consumer template, message verifier and the
verification facade. No DI container library: explicit factories only. The
consumer template backend is selected from settings (consumer_backend).
"""
from __future__ import annotations

from typing import Any

from loguru import logger

from verifier.app.application.contract_messaging import ContractVerifierMessaging
from verifier.app.application.message_verifier import ConsumerMessageVerifier
from verifier.app.config.settings import Settings
from verifier.app.core import SERVICE_NAME
from verifier.app.domain.messaging_type import MessagingType
from verifier.app.infrastructure.config.property_sources import SettingsPropertySource
from verifier.app.infrastructure.messaging.factory import create_consumer_template
from verifier.app.ports.consumer_template import ConsumerTemplate
from verifier.app.ports.property_source import PropertySource


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class MessagingNotConfiguredError(RuntimeError):
    """Raised when MESSAGING_TYPE is unset, blank or "false"; messaging verification is then disabled."""


def create_message_verifier(
    messaging_type: str | MessagingType | None,
    properties: PropertySource,
    consumer: ConsumerTemplate,
) -> ConsumerMessageVerifier:
    if not isinstance(messaging_type, MessagingType):
        messaging_type = MessagingType.from_config(messaging_type)
    return ConsumerMessageVerifier(messaging_type, properties, consumer)


def create_contract_verifier_messaging(verifier: ConsumerMessageVerifier) -> ContractVerifierMessaging:
    return ContractVerifierMessaging(verifier)


class VerifierDependencies:
    """Holds wired verifier dependencies and their lifecycle. Caller owns close()."""

    def __init__(
        self,
        *,
        settings: Settings,
        properties: PropertySource,
        consumer: ConsumerTemplate,
    ) -> None:
        self._settings = settings
        self._properties = properties
        self._consumer = consumer
        self._verifier = create_message_verifier(settings.messaging_type, properties, consumer)
        self._messaging = create_contract_verifier_messaging(self._verifier)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def consumer(self) -> ConsumerTemplate:
        return self._consumer

    @property
    def verifier(self) -> ConsumerMessageVerifier:
        return self._verifier

    @property
    def messaging(self) -> ContractVerifierMessaging:
        return self._messaging

    async def close(self) -> None:
        try:
            await self._consumer.close()
        except Exception as exc:
            logger.warning("consumer template close failed: {}", exc)


def create_verifier_dependencies(
    settings: Settings | None = None,
    *,
    consumer: ConsumerTemplate | None = None,
) -> VerifierDependencies:
    _settings = settings or Settings()
    if _settings.messaging_type.strip().lower() in ("", "false"):
        raise MessagingNotConfiguredError("MESSAGING_TYPE is not set")
    _consumer = consumer or create_consumer_template(_settings)
    dependencies = VerifierDependencies(
        settings=_settings,
        properties=SettingsPropertySource(_settings),
        consumer=_consumer,
    )
    _log(
        "verifier_wired",
        messaging_type=dependencies.verifier.messaging_type.value,
        consumer_backend=_settings.consumer_backend,
    )
    return dependencies
