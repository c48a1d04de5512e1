from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.serializers import UserSerializer

# ---------------------------
# VIEW
# ---------------------------


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer  # 🔹 explicit

    @extend_schema(
        responses={200: UserSerializer},
        description="Get the authenticated caller's identity and role",
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)
