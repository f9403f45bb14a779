import logging

from django.contrib.auth import authenticate, get_user_model
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import AccessToken

from .permissions import IsAdminRole
from .serializers import (
    UserRegistrationSerializer,
    UserSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    ChangePasswordSerializer,
)
from .tasks import send_welcome_email

logger = logging.getLogger(__name__)

User = get_user_model()


def issue_token(user):
    """Signed access token for ``user``."""
    return str(AccessToken.for_user(user))


class UserRegistrationView(generics.CreateAPIView):
    """
    API endpoint for user registration.
    No authentication required.
    """
    queryset = User.objects.all()
    serializer_class = UserRegistrationSerializer
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(f"User registered: {user.email}")

        try:
            send_welcome_email.delay(str(user.id))
        except Exception as e:
            logger.error(f"Failed to queue welcome email for {user.email}: {e}")

        return Response({
            'success': True,
            'message': 'User registered successfully',
            'token': issue_token(user),
            'user': UserSerializer(user).data,
        }, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    API endpoint for email/password login.
    Returns a bearer token and the user.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request,
            username=serializer.validated_data['email'],
            password=serializer.validated_data['password']
        )
        if user is None:
            logger.info(f"Failed login for {serializer.validated_data['email']}")
            return Response({
                'success': False,
                'message': 'Invalid credentials'
            }, status=status.HTTP_401_UNAUTHORIZED)

        user.record_successful_login()

        return Response({
            'success': True,
            'message': 'Login successful',
            'token': issue_token(user),
            'user': UserSerializer(user).data,
        }, status=status.HTTP_200_OK)


class CurrentUserView(APIView):
    """
    API endpoint returning the authenticated user.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response({
            'success': True,
            'data': UserSerializer(request.user).data
        })


class UserProfileView(APIView):
    """
    API endpoint for updating the user profile.
    Requires authentication.
    """
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request):
        serializer = ProfileUpdateSerializer(
            request.user,
            data=request.data,
            partial=True
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        return Response({
            'success': True,
            'message': 'Profile updated successfully',
            'data': UserSerializer(user).data
        })


class ChangePasswordView(APIView):
    """
    API endpoint for changing user password.
    Requires authentication.
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = ChangePasswordSerializer(
            data=request.data,
            context={'request': request}
        )
        serializer.is_valid(raise_exception=True)

        # Set new password
        user = request.user
        user.set_password(serializer.validated_data['newPassword'])
        user.save()

        return Response({
            'success': True,
            'message': 'Password changed successfully'
        }, status=status.HTTP_200_OK)


class UserListView(generics.ListAPIView):
    """
    API endpoint for listing users.
    Only accessible by admins.
    """
    queryset = User.objects.all().order_by('-created_at')
    serializer_class = UserSerializer
    permission_classes = [IsAdminRole]
    filterset_fields = ['role', 'is_active']
    search_fields = ['name', 'email']
    ordering_fields = ['created_at', 'name', 'email']
