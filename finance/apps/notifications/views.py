from rest_framework.response import Response
from rest_framework.views import APIView

from notifications.services import get_notifier, user_topics


class NotificationList(APIView):
    """Hand out and forget everything published to the caller's topics."""

    def get(self, request, *args, **kwargs):
        notifier = get_notifier()
        return Response(
            {
                name: notifier.drain(topic)
                for name, topic in user_topics(request.user.uuid).items()
            }
        )
