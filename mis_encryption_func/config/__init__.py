from .simple_settings import Settings, settings

__all__ = ["Settings", "settings"]
