"""Exceptions raised while handling a media request.

Every error carries the HTTP status the route boundary should answer with.
"""

MB = 1024 * 1024


def _format_size(num_bytes: int) -> str:
    if num_bytes < MB:
        return f"{num_bytes} bytes"
    return f"{num_bytes // MB} MB"


class GatewayError(Exception):
    status_code = 500


class BodyTooLarge(GatewayError):
    status_code = 413

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Request body exceeds {_format_size(limit)}.")


class InvalidRequestBody(GatewayError):
    pass


class FilesystemError(GatewayError):
    pass


class EngineInvocationError(GatewayError):
    """The media engine could not be started or exited abnormally."""


class TranscodeError(EngineInvocationError):
    pass


class ProbeError(EngineInvocationError):
    pass


class EngineTimeout(EngineInvocationError):
    pass
