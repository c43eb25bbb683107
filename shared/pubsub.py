import os
import logging
import redis
from .events import Event

logger = logging.getLogger(__name__)

EVENT_LOG_SIZE = 1000


class PubSubClient:
    """
    Publishes committed tournament events to redis and keeps a capped log of
    them. Subscribers only get an audit stream; state itself goes out over
    Socket.IO.
    """

    def __init__(self, redis_url: str = None, redis_client: redis.Redis = None):
        self.redis_url = redis_url or os.getenv('REDIS_URL', 'redis://localhost:6379')
        self.redis = redis_client or redis.from_url(
            self.redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5
        )

    @staticmethod
    def tournament_channel(tournament_id: str) -> str:
        return f"tournament:{tournament_id}:events"

    @staticmethod
    def event_log_key(tournament_id: str) -> str:
        return f"tournament:{tournament_id}:event_log"

    def publish(self, channel: str, event: Event):
        self.redis.publish(channel, event.to_json())

    def publish_tournament_event(self, tournament_id: str, event: Event):
        self.publish(self.tournament_channel(tournament_id), event)

        self.redis.publish("global:announcements", event.to_json())

    def log_event(self, tournament_id: str, event: Event):
        key = self.event_log_key(tournament_id)
        self.redis.lpush(key, event.to_json())
        self.redis.ltrim(key, 0, EVENT_LOG_SIZE - 1)

    def record(self, tournament_id: str, event: Event) -> bool:
        """Publish and log an event. Redis trouble is logged, never raised."""
        try:
            self.publish_tournament_event(tournament_id, event)
            self.log_event(tournament_id, event)
            return True
        except redis.exceptions.RedisError as e:
            logger.warning(f"Could not publish {event.type} for {tournament_id}: {e}")
            return False

    def get_recent_events(self, tournament_id: str, count: int = 50) -> list:
        events_json = self.redis.lrange(self.event_log_key(tournament_id), 0, count - 1)
        return [Event.from_json(e) for e in events_json]

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except redis.exceptions.RedisError:
            return False
