"""
Separators used inside a single ``key:value`` filter token.

These are part of the wire contract: shared URLs and saved commands embed
them literally. They avoid characters common in filter values (commas in
text, hyphens in dates and negative numbers, colons in times).
"""

ARRAY_DELIMITER = "|"   # checkbox selections: level:error|warn
SLIDER_DELIMITER = "~"  # numeric range: latency:0~500
RANGE_DELIMITER = "_"   # time range: date:2024-01-01_2024-01-31
