from .dependencies import current_user, display_name, require_user
from .m2m import ManagementTokenClient
from .oidc import OIDCClient

__all__ = [
    "ManagementTokenClient",
    "OIDCClient",
    "current_user",
    "display_name",
    "require_user",
]
