"""
Entry point for running nimiq_rpc as a module: python -m nimiq_rpc
"""

from nimiq_rpc.cli.commands import app

if __name__ == "__main__":
    app()
