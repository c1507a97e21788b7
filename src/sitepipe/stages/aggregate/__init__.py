from .batch import INPUTS_KEY, AggregateStage, metadata_key

__all__ = ["AggregateStage", "INPUTS_KEY", "metadata_key"]
