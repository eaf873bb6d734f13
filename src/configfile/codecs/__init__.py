"""
Codec adapters, one module per format.

Modules are imported on demand by :data:`configfile.registry.hub`; importing
this package does not import any backend library.
"""

__all__ = ["BaseCodec"]

from .base import BaseCodec
