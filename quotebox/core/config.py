"""
Tools for managing the Quotebox configuration.

The service is meant to live in a container, so everything that matters can be
set through environment variables:

    DB_URI             Where the quotes live. `mongodb://...` or `file://path/to/quotes.json`
    AUTHORIZATION_KEY  The shared secret required to modify the collection
    LOG_LVL            DEBUG, INFO, WARN, ERROR or OFF

If QUOTEBOX_CONFIG points to a TOML file it gets loaded first,
and the environment variables above are applied on top of it.
"""

from pathlib import Path
from pydantic import BaseModel
import toml
import os

from quotebox.core import __version__

import logging

from typing import Mapping, Optional

# Grab the logger
log = logging.getLogger('quotebox')

# Pydantic model containing all the settings and modifiable values.
class _App(BaseModel):
    name: str = "Quotebox"
    version: str = __version__
    summary: str = "A tiny REST API serving a collection of quotes."

class _Server(BaseModel):
    port: int = 8080
    host: str = '0.0.0.0'

class _Database(BaseModel):
    dsn: str = 'file://./quotes.json'

class _Security(BaseModel):
    authorization_key: Optional[str] = None
    auth_header: str = "Authorization"
    protected_prefixes: tuple = ('/quotes',)

class _Cors(BaseModel):
    allow_origins: list[str] = ['*']
    allow_methods: list[str] = ['GET']
    expose_headers: list[str] = ['X-Pagination-Page', 'X-Pagination-Size', 'X-Pagination-Count']

class _RateLimits(BaseModel):
    enabled: bool = False
    rules: tuple = ("3/second", "20/minute")

class _Advanced(BaseModel):
    log_level: str = 'INFO'

class ConfigModel(BaseModel):
    app: _App = _App()
    server: _Server = _Server()
    database: _Database = _Database()
    security: _Security = _Security()
    cors: _Cors = _Cors()
    rate_limits: _RateLimits = _RateLimits()
    advanced: _Advanced = _Advanced()


# Environment variable -> (section, field)
ENV_OVERRIDES = {
    'DB_URI': ('database', 'dsn'),
    'AUTHORIZATION_KEY': ('security', 'authorization_key'),
    'LOG_LVL': ('advanced', 'log_level'),
}


def config_load(path: str | Path = None, environ: Mapping[str, str] = None) -> ConfigModel:
    """
    Build the ConfigModel used for the lifetime of the process.

    :param path: Optional TOML file. Defaults to the QUOTEBOX_CONFIG environment variable.
    :param environ: Environment to read overrides from. Defaults to os.environ.
    """
    if environ is None:
        environ = os.environ

    if path is None and (_conf := environ.get('QUOTEBOX_CONFIG')):
        path = Path(_conf)

    _config = {}

    if path is not None:
        path = Path(path)

        if path.is_dir():
            raise IsADirectoryError(
                "Specified config file is a directory. Please delete it or change your config path."
            )

        log.info('Loading config from %s' % path.absolute())

        with open(path, mode='r', encoding='UTF-8') as fp:
            _config = toml.load(fp)

    for env, (section, field) in ENV_OVERRIDES.items():
        if (value := environ.get(env)) is not None:
            _config.setdefault(section, {})[field] = value

    config = ConfigModel.model_validate(_config)

    if not config.security.authorization_key:
        log.warning("AUTHORIZATION_KEY has not been set. Every write request will be refused.")

    return config

def config_dump(obj: ConfigModel, path: str | Path):
    """
    Dump a ConfigModel to a TOML file
    """
    data = obj.model_dump(mode='json', exclude_none=True)

    with open(path, mode='w', encoding='UTF-8') as fp:
        toml.dump(data, fp)


# Prevent any devs from importing anything confusing and irrelevant
__all__ = [
    'ConfigModel',
    'config_load',
    'config_dump'
]
