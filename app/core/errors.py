# app/core/errors.py
"""
Errores de dominio. Los services los lanzan y `app.main` los convierte
en JSON `{message}` con el status correspondiente.
"""
from __future__ import annotations


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(AppError):
    """Entrada inválida que pasó el schema pero no tiene sentido."""
    status_code = 400


class Unauthorized(AppError):
    """Token ausente, inválido o vencido."""
    status_code = 401


class Forbidden(AppError):
    """El usuario no es dueño del recurso."""
    status_code = 403


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    """Clave única duplicada."""
    status_code = 409
