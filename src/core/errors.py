# core/errors.py


class RayTracerError(Exception):
    """Base class for every error raised by the renderer."""


class ConfigurationError(RayTracerError, ValueError):
    """
    Raised when a scene, camera, material or render parameter is invalid.
    Detected at construction time so that no NaNs reach the integrator.
    """


class DegenerateVectorError(RayTracerError, ArithmeticError):
    """Raised when normalizing a vector of zero length."""


class RenderCancelled(RayTracerError):
    """Raised by the renderer when its cancel token is set."""
