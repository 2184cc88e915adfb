"""
An ASGI application built using FastAPI
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from contextlib import asynccontextmanager

from typing import Dict, Any

from quotebox.core.logger import log, set_log_level
from quotebox.core.config import ConfigModel, config_load
from quotebox.core.security import SecurityMiddleware, create_rate_limiter
from quotebox.core.responses import respond
from quotebox.routers import quotes_router
from quotebox.service import QuoteService
from quotebox.storage import StorageDriver, QuoteNotFound, QuoteConflict, get_storage


# Function to control app startup and shutdown
@asynccontextmanager
async def lifespan(app: "Quotebox"):
    log.info(f'Serving [bold magenta]{app.storage.count_quotes()}[/bold magenta] quotes')
    yield
    app.storage.close()


# Our main application class
class Quotebox(FastAPI):
    def __init__(
            self,
            config: ConfigModel = None,
            storage: StorageDriver = None,
            *args,
            **kwargs
    ):
        """
        A REST API serving a single collection of quotes

        :param config: The configuration to run with. Loaded from the environment if omitted.
        :param storage: The storage backend. Picked from `config.database.dsn` if omitted.
        """
        if config is None:
            config = config_load()

        self.config = config

        # Set log level now that config is accessible
        set_log_level(config.advanced.log_level)

        # Set up FastAPI application
        super().__init__(
            *args,
            title=config.app.name,
            summary=config.app.summary,
            version=config.app.version,
            lifespan=lifespan,
            **kwargs
        )

        if storage is None:
            log.info(f'Using storage [bold yellow]{config.database.dsn.split("://")[0]}[/bold yellow]')
            storage = get_storage(config.database.dsn)

        self.storage = storage
        self.service = QuoteService(storage)

        # Install rate limiter
        self.state.limiter = create_rate_limiter(config)
        # noinspection PyTypeChecker
        self.add_middleware(SlowAPIMiddleware)

        # Install security middleware
        # noinspection PyTypeChecker
        self.add_middleware(SecurityMiddleware, config=config)

        # Browsers may read quotes from anywhere
        # noinspection PyTypeChecker
        self.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors.allow_origins,
            allow_methods=config.cors.allow_methods,
            expose_headers=config.cors.expose_headers,
        )

        self.include_router(quotes_router)

        # Make errors consistent with Quotebox status messages
        # noinspection PyTypeChecker
        self.add_exception_handler(RequestValidationError, self.validation_exception_handler)
        # noinspection PyTypeChecker
        self.add_exception_handler(Exception, self.internal_error_handler)
        self.add_respond_handler(QuoteNotFound, 'quote_not_found')
        self.add_respond_handler(QuoteConflict, 'already_exists')
        self.add_respond_handler(RateLimitExceeded, 'rate_limited')
        self.add_respond_handler(404, 'not_found')

    def add_respond_handler(self, exc_class_or_status_code: int | type[Exception], response_code: str):
        # noinspection PyUnusedLocal
        def handler(request, exc):
            return respond(response_code)

        self.add_exception_handler(exc_class_or_status_code, handler)

    # noinspection PyUnusedLocal
    @staticmethod
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        err = exc.errors()[0]
        return respond(
            'validation_error',
            location=list(err['loc']),
            issue=err['msg'],
            type=err['type']
        )

    @staticmethod
    async def internal_error_handler(request: Request, exc: Exception):
        log.error(f"[{request.method}] {request.url.path} failed: {exc!r}", exc_info=exc)
        return respond('internal_error')

    def openapi(self) -> Dict[str, Any]:
        if self.openapi_schema:
            return self.openapi_schema

        docs = (
            "\n## Pagination\
            \n`GET /quotes` accepts the `pagination-page` and `pagination-size` query parameters \
            (defaults to page 1 with 50 quotes, 100 at most). \
            The page, size and total count are returned in the `X-Pagination-Page`, \
            `X-Pagination-Size` and `X-Pagination-Count` headers.\n"
        )

        docs += f"\n## Security\
        \nAdding or replacing quotes requires the authorization key in the \
        `{self.config.security.auth_header}` header.\n"

        if self.config.rate_limits.enabled:
            docs += "\n## Rate Limiting\
            \nAfter you've passed the maximum number of requests, the server will refuse new connections \
            until enough time has passed.\n| **Requests** | **Duration** |\n|:---:|:---:|"

            for rate in self.config.rate_limits.rules:
                requests, duration = rate.split('/')
                docs += "\n| %s | Per %s |" % (requests, duration)

        openapi_schema = get_openapi(
            title=self.title,
            version=self.version,
            summary=self.summary,
            description=docs,
            routes=self.routes,
        )

        openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})
        openapi_schema["components"]["securitySchemes"]["AuthorizationKey"] = {
            "type": "apiKey",
            "in": "header",
            "name": self.config.security.auth_header
        }

        self.openapi_schema = openapi_schema
        return self.openapi_schema
