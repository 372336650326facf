from .login import LoginPage

__all__ = ["LoginPage"]
