"""Posts Routes — compound documents for the sample blog.

Invariants:
    - Resources are built fresh per request (memoized relationship maps never leak)
    - `?include=` drives which relationships appear in `relationships` and `included`
    - Unknown post id → ResourceNotFoundError (404), malformed include → 400

Design Decisions:
    - Request passed straight to core as the include source: starlette's query_params
      satisfies the IncludeRequest protocol
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from jsonapi_compound.api.blog_store import blog_store
from jsonapi_compound.api.resources import PostResource
from jsonapi_compound.core.document import build_compound_document
from jsonapi_compound.core.errors import ResourceNotFoundError
from jsonapi_compound.core.resource import JsonApiResource, JsonApiResourceCollection
from jsonapi_compound.schemas.document import CompoundDocument

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


class JsonApiResponse(JSONResponse):
    media_type = "application/vnd.api+json"


@router.get(
    "",
    response_model=CompoundDocument,
    response_model_exclude_unset=True,
    response_class=JsonApiResponse,
)
async def list_posts(request: Request):
    """All posts, with requested relationships included."""
    return _render(PostResource.collection(blog_store.list_posts()), request)


@router.get(
    "/{post_id}",
    response_model=CompoundDocument,
    response_model_exclude_unset=True,
    response_class=JsonApiResponse,
)
async def get_post(post_id: int, request: Request):
    """One post, with requested relationships included."""
    post = blog_store.get_post(post_id)
    if post is None:
        raise ResourceNotFoundError("posts", str(post_id))
    return _render(PostResource(post), request)


def _render(
    data: JsonApiResource | JsonApiResourceCollection, request: Request,
) -> CompoundDocument:
    document = build_compound_document(data, request)
    logger.info(
        "Rendered compound document",
        extra={"path": request.url.path, "included_count": len(document["included"])},
    )
    return CompoundDocument.model_validate(document)
