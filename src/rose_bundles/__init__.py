"""Bundle configuration for the rose sale storefront."""

__version__ = "0.1.0"
