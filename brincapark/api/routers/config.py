from fastapi import APIRouter, Depends

from brincapark.api.dependencies import get_use_cases, require_admin
from brincapark.api.schemas.config import ConfigurationResponse, UpdateConfigurationRequest

router = APIRouter()


@router.get("", response_model=ConfigurationResponse)
async def get_configuration(use_cases=Depends(get_use_cases)) -> ConfigurationResponse:
    config = await use_cases["get_configuration"].execute()
    return ConfigurationResponse.from_entity(config)


@router.put(
    "",
    response_model=ConfigurationResponse,
    dependencies=[Depends(require_admin)],
)
async def update_configuration(
    payload: UpdateConfigurationRequest,
    use_cases=Depends(get_use_cases),
) -> ConfigurationResponse:
    config = await use_cases["update_configuration"].execute(payload.to_fields())
    return ConfigurationResponse.from_entity(config)
