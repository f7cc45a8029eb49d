# src/eth_wallet_server/cli/cli.py
import argparse
import sys
from typing import List, Optional

import uvicorn

from ..api.server import build_wallet_api, create_app
from ..config.settings import Settings, resolve
from ..exceptions import ConfigError, KeyStoreError
from ..utils.logger import get_logger, setup_logging
from ..wallet.keys import load_or_create

logger = get_logger(__name__)

ENDPOINTS = [
    ("GET ", "/", "Health check"),
    ("GET ", "/health", "Health check"),
    ("GET ", "/network", "Network information"),
    ("GET ", "/account", "Account information"),
    ("GET ", "/balance", "Wallet balance"),
    ("GET ", "/balance/:addr", "Balance for any address"),
    ("GET ", "/gas-price", "Current gas price"),
    ("GET ", "/estimate-gas/:to/:amount", "Estimate gas for transaction"),
    ("POST", "/transaction/send", "Send transaction"),
]


class CLI:
    def __init__(self):
        self.settings: Optional[Settings] = None

    def main(self, args: List[str]) -> int:
        parser = self.create_parser()
        args = parser.parse_args(args)
        func = getattr(args, 'func', self.serve)

        setup_logging()
        try:
            self.settings = resolve()
            setup_logging(self.settings.log_level, self.settings.log_dir)
            return func(args) or 0
        except (ConfigError, KeyStoreError) as e:
            logger.error(f"Startup failed: {e}")
            return 1

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Ethereum wallet REST server')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        serve = subparsers.add_parser('serve', help='Run the HTTP server (default)')
        serve.set_defaults(func=self.serve)

        account = subparsers.add_parser('account', help='Load or create the wallet key and print its address')
        account.set_defaults(func=self.show_account)

        config = subparsers.add_parser('config', help='Print the resolved settings')
        config.set_defaults(func=self.show_config)

        return parser

    def serve(self, args) -> int:
        settings = self.settings
        logger.info("Starting Ethereum Wallet Server...")
        logger.info(
            f"Network: {settings.network_name} (id {settings.network_id}), "
            f"key file: {settings.key_file}"
        )

        account = load_or_create(settings.key_file)
        logger.info(f"Account address: {account.address}")

        app = create_app(build_wallet_api(settings, account))

        logger.info(f"Server starting on http://{settings.server_address}")
        logger.info("Available endpoints:")
        for method, path, description in ENDPOINTS:
            logger.info(f"  {method} {path:<26} - {description}")

        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
        return 0

    def show_account(self, args) -> int:
        account = load_or_create(self.settings.key_file)
        print(f"Address: {account.address}")
        return 0

    def show_config(self, args) -> int:
        print(self.settings.model_dump_json(indent=2))
        return 0


def main():
    cli = CLI()
    sys.exit(cli.main(sys.argv[1:]))


if __name__ == "__main__":
    main()
