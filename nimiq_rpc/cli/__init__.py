"""CLI module for nimiq_rpc."""
