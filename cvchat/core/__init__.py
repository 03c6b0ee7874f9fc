"""Core module for the cvchat application."""


# Lazy import keeps the container (and its service graph) out of plain model imports
def get_container():
    """Get container instance with lazy import."""
    from cvchat.core.container import get_container as _get_container

    return _get_container()
