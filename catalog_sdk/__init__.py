"""Client core for the catalog store: store client, rates, local state, search and edit session."""

__version__ = "0.1.0"
