"""
Profile Classifier: heuristic bot detection for social-network profiles.

Takes an already-extracted profile summary (name, headline, age, connection
count, declared locations) and labels it suspicious, verified, or
undetermined from a fixed set of explainable signals. Pure rule engine:
extraction, storage, and presentation are left to the caller.
"""

__version__ = "0.1.0"
