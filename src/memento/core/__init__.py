"""Core host metadata, classification and verification."""
