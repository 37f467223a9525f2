from fastapi import status

from rent_service.domain.errors import ERROR_KINDS, ErrorKind
from rent_service.libs.result import Error

KIND_STATUS = {
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.unauthorized: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.forbidden: status.HTTP_403_FORBIDDEN,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
    ErrorKind.precondition_failed: status.HTTP_412_PRECONDITION_FAILED,
    ErrorKind.invalid_argument: status.HTTP_400_BAD_REQUEST,
    ErrorKind.invalid_state: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(
        self, base_error: Error, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the transport error matching the kind of a use-case error."""
    kind = ERROR_KINDS.get(error.code)
    if kind == ErrorKind.unavailable:
        raise ServerError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    if kind is None:
        raise ServerError(error)
    raise ClientError(error, status_code=KIND_STATUS[kind])
