# app/core/json.py
from typing import Any
import json
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

class UTF8JSONResponse(JSONResponse):
    """
    JSON en UTF-8 sin escapes ASCII (usernames y contenido con acentos/emojis
    viajan tal cual). jsonable_encoder previo convierte datetime, etc.
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        payload = jsonable_encoder(content)
        return json.dumps(
            payload,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def error_response(status_code: int, message: str, **extra: Any) -> UTF8JSONResponse:
    """Cuerpo de error uniforme: {"message": ..., ...extra}."""
    return UTF8JSONResponse(status_code=status_code, content={"message": message, **extra})
