#
# Reading quotes is open to everyone.
# Anything that modifies the collection (POST, PUT) under one of the
# protected prefixes must carry the shared authorization key in the auth header.
#
# Requests are refused before the body is even looked at, so a bad key always gives a 401.
#
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from typing import Optional

import hmac

from quotebox.core.config import ConfigModel
from quotebox.core.responses import respond
from quotebox.core.logger import log

WRITE_METHODS = ('POST', 'PUT',)


def create_rate_limiter(config: ConfigModel) -> Limiter:
    return Limiter(
        key_func=get_remote_address,
        default_limits=list(config.rate_limits.rules),
        enabled=config.rate_limits.enabled
    )


def check_key(expected: Optional[str], provided: Optional[str]) -> bool:
    """
    Compare the provided key with the configured one in constant time.
    Without a configured key nothing is ever accepted.
    """
    if not expected or provided is None:
        return False

    return hmac.compare_digest(expected.encode('utf-8'), provided.encode('utf-8'))


# Middleware for managing security
class SecurityMiddleware(BaseHTTPMiddleware):
    def __init__(self, *args, config: ConfigModel = None, **kwargs):
        self.config = config or ConfigModel()

        super().__init__(*args, **kwargs)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if (
            request.method in WRITE_METHODS
            and request.url.path.startswith(self.config.security.protected_prefixes)
        ):
            if resp := self.key_auth(request):
                self.access_log(request, resp)
                return resp

        response = await call_next(request)
        self.access_log(request, response)
        return response

    def key_auth(self, request: Request) -> Optional[Response]:
        """
        Returns an error response if the request isn't allowed through, otherwise None
        """
        provided = request.headers.get(self.config.security.auth_header)

        if not provided:
            log.warning("Missing authorization key from %s" % self.client_host(request))
            return respond('auth_required')

        if not check_key(self.config.security.authorization_key, provided):
            log.warning("Invalid authorization key from %s" % self.client_host(request))
            return respond('invalid_auth_key')

        return None

    @staticmethod
    def client_host(request: Request) -> str:
        return request.client.host if request.client else 'unknown'

    def access_log(self, request: Request, response: Response):
        log.info(f"{self.client_host(request)} -> [{request.method}] {request.url.path} {response.status_code}")
