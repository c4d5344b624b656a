"""
bagforge: BagIt manifests and tag files.

Parses, verifies and writes checksum manifests, and formats tag files
with 79-column wrapped fields.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
