from fastapi import APIRouter, Depends, status

from ..core.logging import get_logger
from ..dependencies import get_classifier_service
from ..dto.health import HealthStatusResponse
from ..services.classification import ClassifierService


logger = get_logger("health")

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthStatusResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check(
    classifier: ClassifierService = Depends(get_classifier_service),
) -> HealthStatusResponse:
    """Endpoint simple de salud; informa además el estado del modelo."""
    logger.debug("Health check solicitado")
    return HealthStatusResponse(model_state=classifier.state.value)
