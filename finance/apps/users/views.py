import structlog
from django.contrib.auth import authenticate
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.authtoken.views import ObtainAuthToken
from rest_framework.generics import (
    CreateAPIView,
    GenericAPIView,
    RetrieveUpdateAPIView,
    UpdateAPIView,
)
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from users.models import User
from users.serializers import (
    ChangeBaseCurrencySerializer,
    ChangePasswordSerializer,
    RegisterSerializer,
    UpdateProfileSerializer,
    UserLoginSerializer,
    UserSerializer,
)
from users.services import UserService

logger = structlog.get_logger()


class UserAuth(ObtainAuthToken):
    serializer_class = UserLoginSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = authenticate(
            request,
            username=serializer.validated_data["username"],
            password=serializer.validated_data["password"],
        )
        if user is None:
            logger.info(
                "users.login_failed", username=serializer.validated_data["username"]
            )
            return Response(status=status.HTTP_401_UNAUTHORIZED)

        token, _ = Token.objects.get_or_create(user=user)
        return Response(
            {
                "token": token.key,
                "username": user.username,
                "base_currency": user.base_currency,
            }
        )


class UserLogout(GenericAPIView):
    def post(self, request, *args, **kwargs):
        Token.objects.filter(user=request.user).delete()
        logger.info("users.logged_out", user=str(request.user.uuid))
        return Response(status=status.HTTP_204_NO_CONTENT)


class RegisterView(CreateAPIView):
    queryset = User.objects.all()
    permission_classes = (AllowAny,)
    serializer_class = RegisterSerializer


class CurrentUser(RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):
        return UserService.find_by_id(self.request.user.uuid)

    def update(self, request, *args, **kwargs):
        serializer = UpdateProfileSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = UserService.update_profile(request.user.uuid, serializer.validated_data)
        return Response(self.get_serializer(user).data)


class CurrencyView(UpdateAPIView):
    serializer_class = ChangeBaseCurrencySerializer

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.change_base_currency(
            request.user.uuid, serializer.validated_data["currency"]
        )
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


class ChangePassword(UpdateAPIView):
    serializer_class = ChangePasswordSerializer
    http_method_names = ["patch", "put", "options"]

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        UserService.change_password(request.user, serializer.validated_data["new_password"])
        return Response(status=status.HTTP_204_NO_CONTENT)
