"""
Sigscan App - Market Signal Analysis Engine

Turns point-in-time snapshots of technical-indicator fields into normalized,
explainable trading signals: per-indicator readings, a buy/sell dominance
score, pivot-point levels, and a weighted final decision with confidence.
"""

__version__ = "0.1.0"
__author__ = "Sigscan Team"
