from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from starlette.datastructures import UploadFile

from ..core.logging import get_logger
from ..dependencies import get_classification_pipeline
from ..dto.classification import ClassificationReport, ErrorResponse
from ..exceptions import AgroVisionError, InputError
from ..services.classification import ClassificationPipeline
from .responses import error_response


logger = get_logger("classification_controller")

router = APIRouter(tags=["clasificacion"])


@router.post(
    "/classify",
    response_model=ClassificationReport,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
)
async def clasificar_imagen(
    request: Request,
    pipeline: ClassificationPipeline = Depends(get_classification_pipeline),
):
    """Clasifica la enfermedad de una hoja a partir del campo ``image`` (multipart).

    El formulario se lee dentro del handler para que cualquier error, incluido
    un campo ``image`` que no es un archivo, se devuelva como 500 con el
    mensaje en ``error``.
    """
    try:
        async with request.form() as form:
            image = form.get("image")
            if image is None:
                raise InputError("No image provided")
            if not isinstance(image, UploadFile):
                raise InputError("The image field must be a file upload")

            image_bytes = await image.read()
            logger.info(
                "Procesando clasificación de imagen",
                extra={"filename": image.filename, "bytes": len(image_bytes)},
            )
        return await pipeline.classify(image_bytes)

    except AgroVisionError as exc:
        logger.warning(
            "Error al clasificar imagen",
            extra={"error": str(exc), "tipo": type(exc).__name__},
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Error inesperado al clasificar imagen")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
