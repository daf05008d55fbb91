from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "size"   # ?size=50
    page_query_param = "page"        # ?page=1
    max_page_size = 100
