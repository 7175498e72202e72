from fastapi import HTTPException, status
from portal.modules.normalizer.results import ErrorKind, Failure

HTTP_STATUS_FOR = {
    ErrorKind.AUTH_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UPSTREAM_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.NO_PAYLOAD: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.TRANSPORT_ERROR: status.HTTP_502_BAD_GATEWAY,
}

def http_error(failure: Failure) -> HTTPException:
    code = HTTP_STATUS_FOR.get(failure.reason, status.HTTP_502_BAD_GATEWAY)
    return HTTPException(status_code=code, detail=failure.message)
