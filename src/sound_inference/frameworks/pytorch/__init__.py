from .engine import PyTorchMobileEngine

__all__ = ["PyTorchMobileEngine"]
