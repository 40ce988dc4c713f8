from __future__ import annotations

"""
backend/upstream_errors.py

Errores de los clientes upstream (TMDb / OMDb).

- UpstreamTransportError: fallo de red o respuesta no-JSON.
- UpstreamAPIError: respuesta bien formada que indica un fallo lógico
  (TMDb non-2xx con status_message, OMDb Response="False" con Error).

El MovieService propaga los de TMDb tal cual; los de OMDb se absorben por record.
"""


class UpstreamError(Exception):
    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source


class UpstreamTransportError(UpstreamError):
    pass


class UpstreamAPIError(UpstreamError):
    def __init__(self, source: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(source, message)
        self.status_code = status_code
