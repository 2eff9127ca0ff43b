"""Prediction contexts, MurmurHash3 hashing and parse-tree rule contexts for adaptive LL(*) parsing."""

__version__ = "0.1.0"
__all__ = ["murmur", "prediction_context", "parser_rule_context"]