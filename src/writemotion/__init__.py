"""Style blending pipeline: fingerprint, persona and rewrite generation."""

__version__ = "0.1.0"
