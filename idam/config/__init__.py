"""Configuration module for the IDAM client."""
from .settings import ClientConfig, load_settings

__all__ = ["ClientConfig", "load_settings"]
