"""Middleware CORS: cabeceras en todas las respuestas y respuesta directa a preflight."""
from fastapi import Request, Response

from starlette.middleware.base import BaseHTTPMiddleware

from ..core.logging import get_logger

logger = get_logger("cors")


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # Preflight: 200 con cuerpo vacío, sin pasar por los routers
        if request.method == "OPTIONS":
            logger.debug("Preflight CORS", extra={"path": request.url.path})
            return Response(status_code=200, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
