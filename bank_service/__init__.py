"""Bank demo service: user CRUD and a transaction ledger with derived balance."""

__version__ = "0.1.0"
