from typing import Any
from uuid import UUID

import pydantic
import structlog
from django.core.cache import cache

from finance.config import get_settings

logger = structlog.get_logger()

CACHE_PREFIX = "notifications"


def budgets_topic(user_uuid: UUID) -> str:
    return f"/topic/budgets/{user_uuid}"


def jobs_topic(user_uuid: UUID) -> str:
    return f"/topic/jobs/{user_uuid}"


def user_topics(user_uuid: UUID) -> dict[str, str]:
    return {"budgets": budgets_topic(user_uuid), "jobs": jobs_topic(user_uuid)}


class Notifier:
    """Best-effort push of a payload to a topic.

    ``publish`` never raises. Delivery failures are logged and dropped so a
    notification can not fail the operation that produced it.
    """

    def publish(self, topic: str, payload: Any) -> bool:
        if isinstance(payload, pydantic.BaseModel):
            payload = payload.model_dump(mode="json", by_alias=True)
        try:
            self._deliver(topic, payload)
        except Exception:
            logger.exception("notifications.delivery_failed", topic=topic)
            return False

        logger.info("notifications.published", topic=topic)
        return True

    def _deliver(self, topic: str, payload: Any) -> None:
        raise NotImplementedError


class CacheNotifier(Notifier):
    """Keeps undelivered messages per topic in the Django cache until drained.

    Every message has its own key, numbered by ``incr`` on the topic counter.
    A drain claims a message with ``add`` before handing it out.
    """

    def __init__(self, cache_backend=None, ttl: int | None = None, max_messages: int | None = None):
        settings = get_settings().notifications
        self.cache = cache_backend or cache
        self.ttl = ttl or settings.ttl
        self.max_messages = max_messages or settings.max_messages

    @staticmethod
    def cache_key(topic: str, suffix) -> str:
        return f"{CACHE_PREFIX}:{topic}:{suffix}"

    def _deliver(self, topic, payload):
        counter = self.cache_key(topic, "last")
        self.cache.add(counter, 0, None)
        number = self.cache.incr(counter)
        self.cache.set(self.cache_key(topic, number), payload, self.ttl)

    def drain(self, topic: str) -> list:
        last = self.cache.get(self.cache_key(topic, "last"), 0)
        drained = self.cache.get(self.cache_key(topic, "drained"), 0)
        first = max(drained, last - self.max_messages) + 1

        messages = []
        drained_up_to = last
        for number in range(first, last + 1):
            key = self.cache_key(topic, number)
            claim = f"{key}:claimed"
            if not self.cache.add(claim, True, self.ttl):
                continue
            message = self.cache.get(key)
            if message is None:
                # numbered but not written yet, retried by the next drain
                self.cache.delete(claim)
                drained_up_to = min(drained_up_to, number - 1)
                continue
            self.cache.delete(key)
            messages.append(message)

        if drained_up_to > drained:
            self.cache.set(self.cache_key(topic, "drained"), drained_up_to, None)
        return messages


_default_notifier = None


def get_notifier() -> CacheNotifier:
    global _default_notifier
    if _default_notifier is None:
        _default_notifier = CacheNotifier()
    return _default_notifier
