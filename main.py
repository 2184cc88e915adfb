"""
Runs the Quotebox API with uvicorn.

Configure it through the DB_URI, AUTHORIZATION_KEY and LOG_LVL environment variables,
or point QUOTEBOX_CONFIG at a TOML file.
"""

from uvicorn import run, __version__ as uvicorn_version
from quotebox import Quotebox, __version__ as quotebox_version
from quotebox.core.config import config_load

import logging

log = logging.getLogger('quotebox')

log.info(f"Using [bold yellow]Quotebox v{quotebox_version}[/bold yellow] as backend")
log.info(f"Using [bold yellow]uvicorn v{uvicorn_version}[/bold yellow] as server")

config = config_load()

app = Quotebox(config=config)

if __name__ == '__main__':
    run(
        app,
        host=app.config.server.host,
        port=app.config.server.port,
        log_level="error",
    )
