import os
import logging
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from db import ArticleStore, get_store
from schemas import ArticleSchema, BodyReadError, DecodeError, decode_article, read_body
from models import Article

load_dotenv()

HOST = os.getenv("ARTICLES_HOST", "0.0.0.0")
PORT = int(os.getenv("ARTICLES_PORT", "9090"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

HOME_MESSAGE = "Hello homepage!"
HOME_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

logger = logging.getLogger(__name__)

router = APIRouter()


@router.api_route("/", methods=HOME_METHODS, response_class=PlainTextResponse)
def home():
    return HOME_MESSAGE


@router.get("/articles", response_model=List[ArticleSchema])
def list_articles(store: ArticleStore = Depends(get_store)):
    return [ArticleSchema.from_article(a) for a in store.all()]


@router.post("/articles", response_model=ArticleSchema)
async def create_article(request: Request, store: ArticleStore = Depends(get_store)):
    try:
        body = await read_body(request)
    except BodyReadError as e:
        logger.warning("create_article body read failed: %s", e)
        return Response(status_code=400)

    try:
        article = decode_article(body)
    except DecodeError as e:
        # Undecodable bodies still create an (empty) article.
        logger.debug("create_article decode failed, appending empty article: %s", e)
        article = Article()

    store.append(article)
    return ArticleSchema.from_article(article)


@router.get("/articles/{article_id}", response_model=ArticleSchema)
def get_article(article_id: str, store: ArticleStore = Depends(get_store)):
    article = store.get(article_id)
    if article is None:
        # No 404 here: a miss answers with an empty 200.
        logger.debug("get_article miss id=%r", article_id)
        return Response(status_code=200)
    return ArticleSchema.from_article(article)


@router.put("/articles/{article_id}", response_model=ArticleSchema)
async def update_article(
    article_id: str, request: Request, store: ArticleStore = Depends(get_store)
):
    try:
        body = await read_body(request)
    except BodyReadError as e:
        logger.warning("update_article body read failed: %s", e)
        return Response(status_code=400)

    try:
        changes = decode_article(body)
    except DecodeError:
        return Response(status_code=400)

    article = store.update(
        article_id,
        title=changes.title,
        description=changes.description,
        content=changes.content,
    )
    if article is None:
        return Response(status_code=404)
    return ArticleSchema.from_article(article)


@router.delete("/articles/{article_id}", response_model=ArticleSchema)
def delete_article(article_id: str, store: ArticleStore = Depends(get_store)):
    article = store.delete(article_id)
    if article is None:
        return Response(status_code=404)
    return ArticleSchema.from_article(article)


def create_app(store: Optional[ArticleStore] = None) -> FastAPI:
    app = FastAPI(title="Articles API")
    app.state.store = store if store is not None else ArticleStore()
    app.include_router(router)
    return app


app = create_app()


def run():
    logging.basicConfig(level=LOG_LEVEL)
    logger.info("starting articles api on %s:%s", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
