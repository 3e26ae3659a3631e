"""
Swiftregistry: SWIFT/BIC bank identifier code registry.

This package provides validated storage of SWIFT codes, headquarters to
branch resolution, and bootstrap ingestion from a bank code dataset.
"""

from importlib.metadata import version

__version__ = version("swiftregistry")

__all__ = ["__version__"]
