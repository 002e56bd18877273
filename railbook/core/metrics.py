"""
Client-side metrics instrumentation.
Counters live in the default prometheus_client registry so an embedding
process can expose them alongside its own.
"""

from prometheus_client import Counter, Histogram

# API metrics
api_requests = Counter(
    'railbook_api_requests_total',
    'Total railway API requests',
    ['method', 'status']  # status: HTTP code or "error" for transport failures
)

api_latency = Histogram(
    'railbook_api_latency_seconds',
    'Railway API request latency',
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

# Booking metrics
booking_outcomes = Counter(
    'railbook_booking_outcomes_total',
    'Booking attempts by outcome',
    ['status']  # confirmed, waiting, failed
)

cancellations = Counter(
    'railbook_cancellations_total',
    'Cancellation attempts by result',
    ['result']  # success, failed
)

# Session metrics
session_invalidations = Counter(
    'railbook_session_invalidations_total',
    'Session teardowns by reason',
    ['reason']  # logout, unauthorized
)


def record_api_request(method: str, status: str, duration_seconds: float):
    api_requests.labels(method=method, status=status).inc()
    api_latency.observe(duration_seconds)

def record_booking_outcome(status: str):
    """Record booking outcome. Status: confirmed, waiting, failed"""
    booking_outcomes.labels(status=status).inc()

def record_cancellation(success: bool):
    result = "success" if success else "failed"
    cancellations.labels(result=result).inc()

def record_session_invalidation(reason: str):
    session_invalidations.labels(reason=reason).inc()
