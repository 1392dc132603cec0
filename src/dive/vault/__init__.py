"""Vault access: listing, indexing and writing notes."""
