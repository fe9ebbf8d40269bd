from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_tables
from ..dto.classification import ErrorResponse
from ..dto.reference import (
    ClimateRecordResponse,
    CropResponse,
    DiseaseClassResponse,
    SoilTypeResponse,
)
from ..exceptions import ReferenceNotFoundError
from ..services.classification import DISEASE_CLASSES, DISEASE_TAXONOMY, display_name
from ..services.reference import ClimateRecord, ReferenceTables
from .responses import error_response


router = APIRouter(prefix="/api/v1/reference", tags=["referencia"])


def _climate_to_response(record: ClimateRecord) -> ClimateRecordResponse:
    return ClimateRecordResponse(
        month=record.month,
        temperature=record.temperature,
        rainfall=record.rainfall,
        humidity=record.humidity,
        suitable_crops=sorted(record.suitable_crops),
        season=record.season,
    )


@router.get("/climate", response_model=List[ClimateRecordResponse])
async def listar_clima(tables: ReferenceTables = Depends(get_tables)) -> List[ClimateRecordResponse]:
    """Clima mensual en orden calendario."""
    return [_climate_to_response(record) for record in tables.climate]


@router.get(
    "/climate/{month}",
    response_model=ClimateRecordResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def obtener_clima_mes(month: str, tables: ReferenceTables = Depends(get_tables)):
    try:
        return _climate_to_response(tables.get_climate(month))
    except ReferenceNotFoundError as exc:
        return error_response(status.HTTP_404_NOT_FOUND, str(exc))


@router.get("/crops", response_model=List[CropResponse])
async def listar_cultivos(tables: ReferenceTables = Depends(get_tables)) -> List[CropResponse]:
    return [
        CropResponse(
            id=crop.id,
            name=crop.name,
            season=crop.season,
            growth_duration=crop.growth_duration,
            ideal_temperature=crop.ideal_temperature,
            water_requirement=crop.water_requirement,
            soil_preference=sorted(crop.soil_preference),
        )
        for crop in tables.crops
    ]


@router.get("/soils", response_model=List[SoilTypeResponse])
async def listar_suelos(tables: ReferenceTables = Depends(get_tables)) -> List[SoilTypeResponse]:
    return [
        SoilTypeResponse(
            id=soil.id,
            name=soil.name,
            description=soil.description,
            characteristics=list(soil.characteristics),
        )
        for soil in tables.soils
    ]


@router.get("/diseases", response_model=List[DiseaseClassResponse])
async def listar_enfermedades() -> List[DiseaseClassResponse]:
    """Clases de enfermedad en el orden de salida del modelo."""
    return [
        DiseaseClassResponse(
            index=index,
            id=class_id,
            name=display_name(class_id),
            source=DISEASE_TAXONOMY[class_id].source,
        )
        for index, class_id in enumerate(DISEASE_CLASSES)
    ]
