"""
Concrete ModelTrainEngine implementations.

This module is an organizational namespace only.
Do NOT treat it as a reusable model library.
"""

from .random_forest_train_engine import RandomForestTrainEngine

__all__ = [
    "RandomForestTrainEngine",
]
