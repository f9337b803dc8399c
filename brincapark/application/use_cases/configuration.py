import logging
from typing import Any, Mapping

from brincapark.application.interfaces.clock import Clock
from brincapark.application.interfaces.config_repo import ConfigurationRepo
from brincapark.application.interfaces.transaction_manager import TransactionManager
from brincapark.domain.entities.configuration import Configuration

logger = logging.getLogger(__name__)


class GetConfigurationUseCase:
    def __init__(self, config_repo: ConfigurationRepo, transaction_manager: TransactionManager) -> None:
        self._config_repo = config_repo
        self._transaction_manager = transaction_manager

    async def execute(self) -> Configuration:
        async with self._transaction_manager.start():
            return await self._config_repo.get()


class UpdateConfigurationUseCase:
    def __init__(
        self,
        config_repo: ConfigurationRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._config_repo = config_repo
        self._transaction_manager = transaction_manager
        self._clock = clock

    async def execute(self, fields: Mapping[str, Any]) -> Configuration:
        changes = dict(fields)
        changes["updated_at"] = self._clock.now()

        async def update() -> Configuration:
            return await self._config_repo.update(changes)

        config = await self._transaction_manager.run(update)
        logger.info("Configuration updated", extra={"fields": sorted(fields)})
        return config
