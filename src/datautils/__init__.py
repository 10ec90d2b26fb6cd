"""
datautils: data-representation and signal-processing helpers.

Two independent leaf components:
- domain: Variant tagged union {Integer, Text, Bytes} with hex and integer conversions
- math: sliding-window average and sliding cross-correlation
"""
