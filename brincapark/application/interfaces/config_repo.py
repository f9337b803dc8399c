from typing import Any, Mapping

from brincapark.domain.entities.configuration import Configuration


class ConfigurationRepo:
    async def get(self) -> Configuration:
        """Retorna la configuración vigente, o la de fábrica si nunca se guardó."""
        raise NotImplementedError

    async def update(self, fields: Mapping[str, Any]) -> Configuration:
        """Mezcla `fields` sobre la configuración vigente y la persiste."""
        raise NotImplementedError
