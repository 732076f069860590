"""Fix providers."""
