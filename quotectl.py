#!/usr/bin/env python3
"""
A tool for managing Quotebox: serving the API and importing or exporting quotes.
"""
from pathlib import Path
import json
import sys

import questionary
import fire

from quotebox.core.config import config_load, config_dump
from quotebox.models import QuoteIn
from quotebox.service import QuoteService
from quotebox.storage import get_storage


class QuoteCLI:
    def __init__(self, dsn: str = None):
        """
        :param dsn: Storage to use instead of the configured one
        """
        self.settings = config_load()

        if dsn:
            self.settings.database.dsn = dsn

        self._service = None

    @property
    def service(self) -> QuoteService:
        if self._service is None:
            self._service = QuoteService(get_storage(self.settings.database.dsn))
        return self._service

    def serve(self, host: str = None, port: int = None):
        """Run the API"""
        from uvicorn import run
        from quotebox import Quotebox

        run(
            Quotebox(config=self.settings),
            host=host or self.settings.server.host,
            port=port or self.settings.server.port,
            log_level="error",
        )

    def count(self):
        """Print how many quotes are stored"""
        print(self.service.count_quotes())

    def random(self):
        """Print a random quote"""
        quote = self.service.random_quote()
        print(f'"{quote.text}"' + (f' - {quote.source}' if quote.source else ''))

    def load(self, file: str, yes: bool = False):
        """Replace every stored quote with the ones in a JSON file"""
        with open(file, mode='r', encoding='UTF-8') as fp:
            quotes = [QuoteIn.model_validate(q) for q in json.load(fp)]

        if not yes:
            confirmed = questionary.confirm(
                f"This will replace all {self.service.count_quotes()} stored quotes "
                f"with {len(quotes)} from {file}. Continue?",
                default=False
            ).ask()

            if not confirmed:
                exit()

        created = self.service.set_quotes(quotes)
        print(f"Loaded {len(created)} quotes")

    def dump(self, file: str = None):
        """Write every stored quote as a JSON array, to stdout if no file is given"""
        data = [q.model_dump() for q in self.service.all_quotes()]

        if file is None:
            json.dump(data, sys.stdout, indent=2)
            print()
        else:
            with open(file, mode='w', encoding='UTF-8') as fp:
                json.dump(data, fp, indent=2)

    def config(self, file: str = 'quotebox.toml'):
        """Write the effective configuration to a TOML file"""
        if Path(file).exists():
            if not questionary.confirm(f"{file} already exists. Overwrite it?", default=False).ask():
                exit()

        config_dump(self.settings, file)
        print(f"Config written to {file}")


if __name__ == '__main__':
    fire.Fire(QuoteCLI)
