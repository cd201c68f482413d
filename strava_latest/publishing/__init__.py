from .writer import PayloadWriteError, PayloadWriter, RotationStore

__all__ = ["PayloadWriteError", "PayloadWriter", "RotationStore"]
