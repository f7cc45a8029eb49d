# main.py
from eth_wallet_server.cli.cli import main

if __name__ == "__main__":
    main()
