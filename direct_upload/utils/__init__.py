from .progress import ProgressCallback, ProgressReporter

__all__ = ["ProgressCallback", "ProgressReporter"]
