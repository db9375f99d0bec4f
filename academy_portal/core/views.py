from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import FieldValidationError
from .storage import resolve_image_url, store_image


class ImageUploadView(APIView):
    """
    POST /api/uploads/images/  (multipart: file, folder)

    Загружает изображение в хранилище и возвращает путь + публичный URL.
    """
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        upload = request.FILES.get('file')
        if upload is None:
            raise FieldValidationError('No file provided', field='file')
        path = store_image(upload, folder=request.data.get('folder', 'general'))
        return Response(
            {'path': path, 'url': resolve_image_url(path)},
            status=status.HTTP_201_CREATED,
        )
