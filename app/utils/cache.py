"""
Redis-backed cache for the sales-rep retailer listings.

Every key lives under ``retailers:sr:<sales_rep_id>:`` so that a single
pattern delete drops all cached pages of one rep.
"""
import hashlib
import json
import logging

import redis

KEY_PREFIX = "retailers:sr"
DEFAULT_TTL = 300  # 5 minutes


class RetailerCache:
    def __init__(self, client, ttl=DEFAULT_TTL, logger=None):
        self.client = client
        self.ttl = ttl
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def namespace(sales_rep_id):
        return f"{KEY_PREFIX}:{sales_rep_id}:"

    def make_key(self, sales_rep_id, params):
        """Hash the full query (page and filters included) into a rep-scoped key."""
        raw = json.dumps(params, sort_keys=True, default=str)
        digest = hashlib.md5(raw.encode("utf-8")).hexdigest()
        return f"{self.namespace(sales_rep_id)}{digest}"

    def get(self, key):
        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            self.logger.warning(f"Cache read failed for {key}: {e}")
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key, value):
        try:
            self.client.setex(key, self.ttl, value)
        except redis.RedisError as e:
            self.logger.warning(f"Cache write failed for {key}: {e}")

    def invalidate_sales_rep(self, sales_rep_id):
        return self._delete_pattern(f"{self.namespace(sales_rep_id)}*")

    def invalidate_sales_reps(self, sales_rep_ids):
        return sum(self.invalidate_sales_rep(rid) for rid in set(sales_rep_ids))

    def _delete_pattern(self, pattern):
        try:
            keys = list(self.client.scan_iter(match=pattern, count=100))
            if keys:
                self.client.delete(*keys)
        except redis.RedisError as e:
            self.logger.warning(f"Could not invalidate cache pattern {pattern}: {e}")
            return 0

        if keys:
            self.logger.info(f"Invalidated {len(keys)} cache keys matching {pattern}")
        return len(keys)
