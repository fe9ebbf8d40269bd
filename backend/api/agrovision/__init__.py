"""AgroVision: recomendaciones de siembra y diagnóstico de enfermedades en hojas."""

__version__ = "1.0.0"
