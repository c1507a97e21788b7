from .log import RecordLogger

__all__ = ["RecordLogger"]
