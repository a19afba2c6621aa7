"""Errores del dominio.

Un único tipo: `RequestFailure`. No distinguimos entre fallo al listar
proyectos y fallo al listar tareas de un proyecto; ambos colapsan aquí.
"""

from __future__ import annotations


class RequestFailure(Exception):
    """Respuesta HTTP no-2xx del API.

    El mensaje siempre incluye el status original; `details` solo existe si
    el cuerpo de la respuesta traía un campo `message`.
    """

    def __init__(self, status_code: int, details: str | None = None) -> None:
        self.status_code = status_code
        self.details = details
        message = f"Request failed with status {status_code}"
        if details is not None:
            message = f"{message}: {details}"
        self.message = message
        super().__init__(message)
