"""Domain age checker: flags domains registered within the last six months."""

__version__ = "0.1.0"
