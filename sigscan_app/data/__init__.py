"""
Snapshot field catalog and acquisition.

Raw snapshots are flat mappings keyed by indicator name qualified with a
timeframe ("RSI|15"); this package names those fields and fetches them.
"""
