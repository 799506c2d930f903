from types import MappingProxyType

fiber_speed = 200000
"speed of light in fiber optic cable in km/s"
earth_radius = 6371
"mean earth radius in km"

routing_factor = 1.3
"routing inefficiency of real (non great-circle) paths"
processing_factor = 1.2
"switch and router processing overhead"
congestion_factor = 1.1
"network congestion overhead"
last_mile = 5
"last mile latency addition in ms"

same_region_latency = 2
"round-trip latency between two services in the same region in ms"
same_region_hop = 1
"latency of one call between co-located services in ms"
min_latency = 1
"lower bound of any total latency in ms"

DEFAULT_CACHE_HIT_RATIO = 0.7
DEFAULT_CACHE_LATENCY = 2
NO_DISTRIBUTION_LATENCY = 5
DEFAULT_SERVICE_REGION = 'us-east'

DATABASE_LATENCY = MappingProxyType({
    'neon': 12,
    'planetscale': 15,
    'supabase': 18,
    'mongodb_atlas': 22,
    'fauna': 35,
    'default': 20,
})

CACHE_LATENCY = MappingProxyType({
    'upstash_redis': 3,
    'redis_cloud': 2,
    'default': 3,
})
