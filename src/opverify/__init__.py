"""opverify - trusted checksum registry for the 1Password CLI binary."""

__version__ = "0.1.0"
