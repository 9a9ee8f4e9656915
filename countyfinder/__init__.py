"""County Finder: resolve a US address to its county through a key-shielding proxy."""

__version__ = "0.1.0"
