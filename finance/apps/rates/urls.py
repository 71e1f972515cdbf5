from django.urls import path
from rates import views

urlpatterns = [
    path("", views.RateList.as_view(), name="rate_list"),
    path("convert/", views.ConvertAmount.as_view(), name="convert_amount"),
]
