from django.urls import path
from users import views

urlpatterns = [
    path("login/", views.UserAuth.as_view(), name="user_auth"),
    path("logout/", views.UserLogout.as_view(), name="user_logout"),
    path("register/", views.RegisterView.as_view(), name="register"),
    path("me/", views.CurrentUser.as_view(), name="current_user"),
    path("me/currency/", views.CurrencyView.as_view(), name="base_currency"),
    path("change/password/", views.ChangePassword.as_view(), name="change_password"),
]
