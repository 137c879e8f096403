"""Tools for listing, extracting, analysing and converting unpacked Warcraft III map directories."""

__version__ = "0.1.0"