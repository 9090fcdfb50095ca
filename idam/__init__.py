"""IDAM user-account client package.

To call the IDAM service:
    from idam.core.idam import UserAuthClient, UserRegistrationRequest

To build a client from environment settings:
    from idam.config import load_settings
    client = load_settings().create_client()
"""

__version__ = "0.1.0"
