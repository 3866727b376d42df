from pydantic import BaseModel, Field

from .corpus import ParagraphContext
from .search import ScoredResult
from .storage import ParagraphRecord


class SearchRequest(BaseModel):
    """Query submitted to the search endpoint"""

    query: str = Field(description="Free-text query")
    books: list[str] | None = Field(
        default=None, description="Books to search; all books when omitted"
    )


class ParagraphModel(BaseModel):
    """A stored paragraph without its embedding"""

    id: int
    book: str
    text: str

    @classmethod
    def from_record(cls, record: ParagraphRecord) -> "ParagraphModel":
        return cls(id=record.id, book=record.book, text=record.text)


class HitModel(ParagraphModel):
    """A ranked paragraph"""

    score: float
    display_percent: int
    is_exact_match: bool

    @classmethod
    def from_result(cls, result: ScoredResult) -> "HitModel":
        return cls(
            id=result.id,
            book=result.book,
            text=result.text,
            score=result.score,
            display_percent=result.display_percent,
            is_exact_match=result.is_exact_match,
        )


class SearchResponse(BaseModel):
    """Visible page of the current result set"""

    query: str
    books: list[str]
    total: int
    visible: int
    has_more: bool
    hits: list[HitModel]


class ContextResponse(BaseModel):
    """A paragraph with its previous and next neighbours"""

    current: ParagraphModel
    previous: ParagraphModel | None = None
    next: ParagraphModel | None = None

    @classmethod
    def from_context(cls, context: ParagraphContext) -> "ContextResponse":
        return cls(
            current=ParagraphModel.from_record(context.current),
            previous=(
                ParagraphModel.from_record(context.previous)
                if context.previous is not None
                else None
            ),
            next=(
                ParagraphModel.from_record(context.next)
                if context.next is not None
                else None
            ),
        )
