"""
Planning Domain - EOQ and MRP computations over a BOM tree.

Both engines are pure: they read a tree snapshot and a demand input and
return new result objects without touching their inputs.
"""
