# File: src/eth_wallet_server/api/server.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..blockchain.client import BlockchainClient
from ..config.settings import Settings
from ..wallet.api import WalletAPI
from ..wallet.keys import WalletAccount
from ..wallet.service import WalletService
from .errors import register_exception_handlers
from .routes import account_router, wallet_router

logger = logging.getLogger(__name__)


def build_wallet_api(
    settings: Settings,
    account: Optional[WalletAccount],
    client: Optional[BlockchainClient] = None
) -> WalletAPI:
    """Wire the shared settings, account and RPC client together"""
    if client is None:
        client = BlockchainClient(settings.rpc_url, timeout=settings.rpc_timeout)
    service = WalletService(client, chain_id=settings.network_id)
    return WalletAPI(settings, client, service, account)


def create_app(wallet_api: WalletAPI) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await wallet_api.check_node()
        yield
        logger.info("Shutting down, closing RPC session")
        await wallet_api.client.close()

    app = FastAPI(title="eth-wallet-server API", version=__version__, lifespan=lifespan)
    app.state.wallet_api = wallet_api

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(account_router)
    app.include_router(wallet_router)

    return app
