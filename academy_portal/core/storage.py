"""
Работа с изображениями в хранилище (Django default_storage).

В БД хранится путь внутри хранилища либо внешний http(s) URL.
"""
import logging
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils.text import slugify

from .exceptions import FieldValidationError

logger = logging.getLogger(__name__)


def resolve_image_url(path):
    if not path:
        return None
    if path.startswith('http'):
        return path
    return default_storage.url(path)


def store_image(upload, folder='general'):
    """
    Сохраняет загруженный файл изображения и возвращает путь в хранилище.

    Расширение имени файла должно соответствовать content_type.

    Raises:
        FieldValidationError: неподдерживаемый тип или слишком большой файл
    """
    content_type = getattr(upload, 'content_type', '')
    extension = settings.IMAGE_UPLOAD_CONTENT_TYPES.get(content_type)
    name_extension = os.path.splitext(upload.name or '')[1].lower()
    if extension is None or settings.IMAGE_UPLOAD_EXTENSIONS.get(name_extension) != content_type:
        raise FieldValidationError('Unsupported image type', field='file')
    if upload.size > settings.IMAGE_UPLOAD_MAX_BYTES:
        raise FieldValidationError('Image is too large (max 5 MB)', field='file')

    folder = slugify(folder) or 'general'
    name = f'images/{folder}/{uuid.uuid4().hex}.{extension}'
    path = default_storage.save(name, upload)
    logger.info('Image stored: %s (%s bytes)', path, upload.size)
    return path
