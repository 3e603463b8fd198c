from typing import Dict, List


def trim_string_values(results: List[Dict]) -> List[Dict]:
    """Strip trailing whitespace from string values; CHAR(n) columns come back space-padded."""
    trimmed = []
    for row in results:
        trimmed.append({
            key: value.rstrip() if isinstance(value, str) else value
            for key, value in row.items()
        })
    return trimmed
