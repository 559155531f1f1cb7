from fastapi import status

from iam.domain.errors import ErrorKind, kind_of
from iam.domain.result import Error

STATUS_BY_KIND = {
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
    ErrorKind.authentication: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.authorization: status.HTTP_403_FORBIDDEN,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.generation: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.internal: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def to_http_error(error: Error) -> Exception:
    """ClientError with the status of the error kind, or ServerError for 5xx kinds"""
    status_code = STATUS_BY_KIND[kind_of(error)]
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        return ServerError(error)
    return ClientError(error, status_code=status_code)
