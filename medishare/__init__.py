"""MediShare Network - inter-clinic medicine surplus sharing API."""

__version__ = "1.0.0"
