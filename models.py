from dataclasses import dataclass, replace
from typing import List


@dataclass
class Article:
    id: str = ""
    title: str = ""
    description: str = ""
    content: str = ""

    def copy(self) -> "Article":
        return replace(self)


SEED_ARTICLES = (
    Article(id="1", title="Golang Tutorial", description="Tutorial for Golang", content="Go is good"),
    Article(id="2", title="Rest APIs", description="About Rest APIs", content="All about REST"),
)


def seed_articles() -> List[Article]:
    return [a.copy() for a in SEED_ARTICLES]
