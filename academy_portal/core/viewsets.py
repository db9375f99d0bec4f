from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import IsPlatformAdmin

from .mixins import BulkDeleteMixin, TranslatedSearchMixin


class AdminModelViewSet(BulkDeleteMixin, TranslatedSearchMixin, viewsets.ModelViewSet):
    """
    CRUD back-office: пагинированный список, create/edit, view, bulk delete.

    detail_serializer_class (если задан) используется для retrieve.
    """

    permission_classes = [IsAuthenticated, IsPlatformAdmin]
    detail_serializer_class = None

    def get_serializer_class(self):
        if self.action == 'retrieve' and self.detail_serializer_class is not None:
            return self.detail_serializer_class
        return super().get_serializer_class()
