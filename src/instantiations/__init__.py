"""Pairing engines backing the SHE layer."""
