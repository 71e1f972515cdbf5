import threading
import uuid
from decimal import Decimal
from unittest.mock import Mock, patch

import pydantic
from django.core.cache import cache
from django.test import SimpleTestCase

from notifications.services import (
    CacheNotifier,
    Notifier,
    budgets_topic,
    jobs_topic,
)


class Payload(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(populate_by_name=True)

    message: str
    remaining_amount: Decimal = pydantic.Field(alias="remainingAmount")


class TestCacheNotifier(SimpleTestCase):
    def setUp(self):
        cache.clear()
        self.notifier = CacheNotifier(ttl=60, max_messages=3)
        self.user_uuid = uuid.uuid4()

    def test_topics(self):
        self.assertEqual(budgets_topic(self.user_uuid), f"/topic/budgets/{self.user_uuid}")
        self.assertEqual(jobs_topic(self.user_uuid), f"/topic/jobs/{self.user_uuid}")

    def test_publish_and_drain(self):
        topic = jobs_topic(self.user_uuid)

        self.assertTrue(self.notifier.publish(topic, "Import finished successfully."))

        self.assertEqual(self.notifier.drain(topic), ["Import finished successfully."])
        self.assertEqual(self.notifier.drain(topic), [])

    def test_pydantic_payload_uses_aliases(self):
        topic = budgets_topic(self.user_uuid)

        self.notifier.publish(
            topic, Payload(message="Warning", remaining_amount=Decimal("200.00"))
        )

        self.assertEqual(
            self.notifier.drain(topic),
            [{"message": "Warning", "remainingAmount": "200.00"}],
        )

    def test_topics_are_isolated(self):
        self.notifier.publish(jobs_topic(self.user_uuid), "done")

        self.assertEqual(self.notifier.drain(budgets_topic(self.user_uuid)), [])
        self.assertEqual(self.notifier.drain(jobs_topic(uuid.uuid4())), [])

    def test_keeps_latest_messages_only(self):
        topic = jobs_topic(self.user_uuid)
        for index in range(5):
            self.notifier.publish(topic, f"message {index}")

        self.assertEqual(
            self.notifier.drain(topic), ["message 2", "message 3", "message 4"]
        )

    def test_concurrent_publishers_lose_nothing(self):
        notifier = CacheNotifier(ttl=60, max_messages=500)
        topic = budgets_topic(self.user_uuid)
        barrier = threading.Barrier(10)

        def publish(worker):
            barrier.wait(timeout=10)
            for index in range(20):
                notifier.publish(topic, f"{worker}-{index}")

        threads = [threading.Thread(target=publish, args=(worker,)) for worker in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        messages = notifier.drain(topic)
        self.assertEqual(len(messages), 200)
        self.assertEqual(len(set(messages)), 200)

    def test_message_is_drained_once(self):
        topic = jobs_topic(self.user_uuid)
        self.notifier.publish(topic, "done")
        other_reader = CacheNotifier(ttl=60, max_messages=3)

        self.assertEqual(other_reader.drain(topic), ["done"])
        self.assertEqual(self.notifier.drain(topic), [])

    def test_numbered_but_unwritten_message_waits_for_next_drain(self):
        topic = jobs_topic(self.user_uuid)
        self.notifier.publish(topic, "first")
        number = cache.incr(CacheNotifier.cache_key(topic, "last"))
        self.notifier.publish(topic, "third")

        self.assertEqual(self.notifier.drain(topic), ["first", "third"])

        cache.set(CacheNotifier.cache_key(topic, number), "second", 60)

        self.assertEqual(self.notifier.drain(topic), ["second"])
        self.assertEqual(self.notifier.drain(topic), [])

    @patch("notifications.services.logger")
    def test_delivery_failure_is_logged_not_raised(self, mock_logger):
        broken_cache = Mock()
        broken_cache.add.side_effect = ConnectionError("cache is down")
        notifier = CacheNotifier(cache_backend=broken_cache, ttl=60, max_messages=3)

        delivered = notifier.publish(jobs_topic(self.user_uuid), "done")

        self.assertFalse(delivered)
        mock_logger.exception.assert_called_once()

    def test_base_notifier_has_no_transport(self):
        self.assertFalse(Notifier().publish("/topic/jobs/x", "done"))
