import secrets

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

security = HTTPBearer(auto_error=False)


def validate_admin_token(credentials: HTTPAuthorizationCredentials | None = Depends(security)):
    # approval endpoints stay closed until an admin token is configured
    if not settings.ADMIN_API_TOKEN:
        return error_response(
            message="Requester administration is disabled",
            status_code=AppStatusCode.AUTHENTICATION_UNAUTHORIZED_ACCESS,
            http_status=status.HTTP_403_FORBIDDEN,
        )

    if credentials is None or not secrets.compare_digest(
            credentials.credentials, settings.ADMIN_API_TOKEN):
        return error_response(
            message="Invalid access token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED,
        )
