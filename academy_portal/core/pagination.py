from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    """Пагинация списков: ?page=&page_size=, ответ {data, meta}."""
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        return Response({
            'data': data,
            'meta': {
                'page': self.page.number,
                'page_size': paginator.per_page,
                'total_items': paginator.count,
                'total_pages': paginator.num_pages,
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'data': schema,
                'meta': {
                    'type': 'object',
                    'properties': {
                        'page': {'type': 'integer'},
                        'page_size': {'type': 'integer'},
                        'total_items': {'type': 'integer'},
                        'total_pages': {'type': 'integer'},
                    },
                },
            },
        }
