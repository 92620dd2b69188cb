"""Ingestion and normalization pipeline for workforce capability survey data."""

__version__ = "0.1.0"
