from .page_query import Paginator, fetch_page  # noqa: F401
