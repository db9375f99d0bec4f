from rest_framework import serializers

from .context import get_current_academy


class AcademyPrimaryKeyRelatedField(serializers.PrimaryKeyRelatedField):
    """
    PrimaryKeyRelatedField, который видит только объекты текущей академии
    (request.academy из контекста сериализатора, иначе академия из context).
    """

    def __init__(self, academy_field='academy', **kwargs):
        self.academy_field = academy_field
        super().__init__(**kwargs)

    def get_queryset(self):
        queryset = super().get_queryset()
        request = self.context.get('request')
        academy = getattr(request, 'academy', None) if request is not None else get_current_academy()
        if academy is None:
            return queryset.none()
        return queryset.filter(**{self.academy_field: academy})
