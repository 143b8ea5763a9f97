import uuid

def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"

"""
ID generation utilities & it provides:
- Submission attempt IDs
- Upload attempt IDs

The main purpose:
Correlate log lines of one request across await points.
"""
