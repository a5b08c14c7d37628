"""
Exceptions for the split tunnel
"""


class SplitTunnelError(Exception):
    """Base exception for invocation-level failures"""
    pass


class UnsupportedPlatformError(SplitTunnelError):
    """Raised when the host OS cannot run the tunnel tooling"""
    pass


class MissingConfigurationError(SplitTunnelError):
    """Raised when no tunnel exists yet and no configuration was supplied"""
    pass


class ConfigurationError(SplitTunnelError):
    """Raised when the supplied tunnel configuration cannot be decoded"""
    pass


class TunnelSetupError(SplitTunnelError):
    """Raised when a tunnel bring-up step fails"""
    pass
