"""Taxonomía de enfermedades reconocidas por el clasificador.

El orden de ``DISEASE_CLASSES`` coincide con el orden del vector de
probabilidades que produce el modelo.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class DiseaseInfo:
    """Contenido de asesoramiento de una clase de enfermedad.

    ``source`` indica el origen del contenido: ``generic`` marca listas de
    asesoramiento general que todavía no tienen material específico de la clase.
    """

    id: str
    symptoms: Tuple[str, ...]
    treatment: Tuple[str, ...]
    prevention: Tuple[str, ...]
    source: str


DISEASE_CLASSES: Tuple[str, ...] = (
    "tomato_late_blight",
    "rice_blast",
    "wheat_rust",
)


GENERIC_SYMPTOMS: Tuple[str, ...] = (
    "Visible spots or lesions on leaves",
    "Discoloration of affected areas",
    "Wilting or dying tissue",
)

GENERIC_TREATMENT: Tuple[str, ...] = (
    "Remove infected plant parts",
    "Apply appropriate fungicide",
    "Improve air circulation",
    "Adjust watering practices",
)

GENERIC_PREVENTION: Tuple[str, ...] = (
    "Use resistant varieties",
    "Practice crop rotation",
    "Maintain proper spacing",
    "Monitor regularly for early signs",
)


DISEASE_TAXONOMY: Dict[str, DiseaseInfo] = {
    "tomato_late_blight": DiseaseInfo(
        id="tomato_late_blight",
        symptoms=(
            "Large, dark, water-soaked spots on leaves and stems",
            "Rapid death of affected plants",
        ),
        treatment=(
            "Apply protective fungicides (Chlorothalonil/Copper) proactively",
            "Remove and bag infected plants immediately",
            "Do not compost infected material",
        ),
        prevention=(
            "Plant resistant varieties",
            "Space plants widely for airflow",
            "Water at the base of the plant only",
            "Scout daily in cool/wet weather",
        ),
        source="extension",
    ),
    "rice_blast": DiseaseInfo(
        id="rice_blast",
        symptoms=GENERIC_SYMPTOMS,
        treatment=GENERIC_TREATMENT,
        prevention=GENERIC_PREVENTION,
        source="generic",
    ),
    "wheat_rust": DiseaseInfo(
        id="wheat_rust",
        symptoms=(
            "Orange or brown powdery spots on leaves",
            "Discoloration of affected areas",
        ),
        treatment=(
            "Apply copper-based fungicide",
            "Remove infected leaves",
        ),
        prevention=(
            "Use resistant varieties",
            "Maintain proper plant spacing",
            "Monitor regularly for early signs",
        ),
        source="extension",
    ),
}


def display_name(class_id: str) -> str:
    """Convierte ``tomato_late_blight`` en ``Tomato Late Blight``."""
    return " ".join(word[:1].upper() + word[1:] for word in class_id.split("_"))
