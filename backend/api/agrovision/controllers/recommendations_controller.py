from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..core.logging import get_logger
from ..dependencies import get_suitability_scorer
from ..dto.classification import ErrorResponse
from ..dto.recommendation import Recommendation, RecommendationRequest
from ..exceptions import InputError, ReferenceNotFoundError
from ..services.suitability import SuitabilityScorer, get_recommendation
from .responses import error_response


logger = get_logger("recommendations_controller")

router = APIRouter(prefix="/api/v1/recommendations", tags=["recomendaciones"])


@router.post(
    "",
    response_model=Recommendation,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def obtener_recomendacion(
    payload: RecommendationRequest,
    scorer: SuitabilityScorer = Depends(get_suitability_scorer),
):
    """Genera la recomendación de siembra para un cultivo, suelo y rendimiento deseado."""
    logger.info(
        "Procesando recomendación de siembra",
        extra={
            "cultivo": payload.crop_id,
            "suelo": payload.soil_id,
            "rendimiento_deseado": payload.desired_yield,
        },
    )

    try:
        return get_recommendation(
            payload.crop_id,
            payload.soil_id,
            payload.desired_yield,
            scorer=scorer,
        )

    except ReferenceNotFoundError as exc:
        logger.warning(
            "Identificador desconocido en recomendación de siembra",
            extra={"error": str(exc)},
        )
        return error_response(status.HTTP_404_NOT_FOUND, str(exc))

    except InputError as exc:
        logger.warning(
            "Error de validación en recomendación de siembra",
            extra={"error": str(exc)},
        )
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    except Exception:  # pylint: disable=broad-except
        logger.exception(
            "Error inesperado al generar recomendación de siembra",
            extra={"cultivo": payload.crop_id, "suelo": payload.soil_id},
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "No se pudo generar la recomendación de siembra",
        )
