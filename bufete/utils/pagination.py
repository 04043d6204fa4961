# bufete/utils/pagination.py
from pydantic import BaseModel, computed_field


class Page(BaseModel):
    """Ventana de un listado paginado; `skip`/`limit` van directo al cursor."""
    page: int
    page_size: int
    total: int
    total_pages: int

    @computed_field
    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def paginate(total: int, page: int, page_size: int) -> Page:
    # una página pedida más allá del final muestra la última
    total_pages = max(-(-total // page_size), 1)
    return Page(page=min(max(page, 1), total_pages), page_size=page_size, total=total, total_pages=total_pages)
