"""Supplier debit note extraction from procurement / invoice spreadsheets."""

__version__ = "0.1.0"
