"""LicenseGate - license-scoped approval registry."""

__version__ = "0.1.0"
