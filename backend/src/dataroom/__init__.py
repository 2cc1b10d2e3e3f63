"""Data Room backend - gated document repository over an object storage bucket."""

__version__ = "0.1.0"
