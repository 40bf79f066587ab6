from .mode_config import ModeLambdaConfig

__all__ = ["ModeLambdaConfig"]
