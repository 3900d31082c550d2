"""
Core business logic services.

Layer-pure services that depend only on:
- stockledger/core/entities/*
- stockledger/core/interfaces/*
- stockledger/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stockledger.core.services.aggregator import MovementAggregator
from stockledger.core.services.alert_classifier import (
    AlertClassifier,
    build_alerts,
    classify_product,
    classify_severity,
    summarize_alerts,
)
from stockledger.core.services.movement_filter import filter_movements
from stockledger.core.services.movement_recorder import MovementRecorder, RecordedMovement

__all__ = [
    "AlertClassifier",
    "MovementAggregator",
    "MovementRecorder",
    "RecordedMovement",
    "build_alerts",
    "classify_product",
    "classify_severity",
    "filter_movements",
    "summarize_alerts",
]
