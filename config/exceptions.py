class ImproperlyConfigured(Exception):
    """Raised when settings are missing or invalid."""
