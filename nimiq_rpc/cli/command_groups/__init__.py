"""Command groups registered on the nimiq-rpc app."""
