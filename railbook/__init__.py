"""
Railbook - railway ticket reservation client.

Session guard, train catalog, booking orchestration (with waiting-list
fallback), booking ledger, PNR status lookup and an admin inventory console,
all driven against the railway REST API.
"""

__version__ = "1.0.0"
