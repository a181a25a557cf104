from prometheus_client import Counter, Histogram, Info
import logging

logger = logging.getLogger(__name__)

# Metrics
REQUESTS_TOTAL = Counter(
    'prepfeed_requests_total',
    'Total number of API requests',
    ['method', 'endpoint', 'status']
)

REQUEST_LATENCY = Histogram(
    'prepfeed_request_latency_seconds',
    'Request latency in seconds',
    ['method', 'endpoint']
)

INTERACTIONS_RECORDED = Counter(
    'prepfeed_interactions_recorded_total',
    'Interaction events appended to the log',
    ['interaction_type']
)

BOOKMARK_CHANGES = Counter(
    'prepfeed_bookmark_changes_total',
    'Bookmark rows created or deleted',
    ['action']
)

RECOMMENDATIONS_GENERATED = Counter(
    'prepfeed_recommendations_generated_total',
    'Recommendation rows persisted by the generator',
    ['recommendation_type']
)

FEED_COLD_STARTS = Counter(
    'prepfeed_feed_cold_starts_total',
    'Feed reads that triggered synchronous generation'
)

SYSTEM_INFO = Info('prepfeed_system', 'API system information')

def log_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record request metrics"""
    REQUESTS_TOTAL.labels(
        method=method,
        endpoint=endpoint,
        status=status_code
    ).inc()

    REQUEST_LATENCY.labels(
        method=method,
        endpoint=endpoint
    ).observe(duration)

def set_system_info(version: str, environment: str):
    """Set system information metrics"""
    SYSTEM_INFO.info({
        'version': version,
        'environment': environment
    })
