from django.utils.text import slugify


def unique_slug(model, value, exclude_pk=None, field='slug', max_length=255):
    """slugify(value) с числовым суффиксом, пока slug занят."""
    base = (slugify(value) or model._meta.model_name)[:max_length - 8]
    candidate = base
    suffix = 2
    queryset = model.objects.all()
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    while queryset.filter(**{field: candidate}).exists():
        candidate = f'{base}-{suffix}'
        suffix += 1
    return candidate
