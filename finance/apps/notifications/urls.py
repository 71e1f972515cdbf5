from django.urls import path
from notifications import views

urlpatterns = [
    path("", views.NotificationList.as_view(), name="notification_list"),
]
