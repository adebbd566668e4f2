"""Blog Resources — JSON:API renderings of the sample ORM models.

Invariants:
    - Every relationship declaration uses when_loaded(): nothing here triggers a load
    - configure_resources() is the only place settings reach the resource classes

Design Decisions:
    - Policy and include parameter set on the JsonApiResource base at startup so every
      subclass shares them (ADR: configuration at the shell, core stays settings-free)
"""

import logging

from jsonapi_compound.config import Settings
from jsonapi_compound.core.includes import IncludeSelector
from jsonapi_compound.core.linkage import RelationshipLink
from jsonapi_compound.core.relationship_value import when_loaded
from jsonapi_compound.core.resource import JsonApiResource

logger = logging.getLogger(__name__)


def configure_resources(settings: Settings) -> None:
    """Apply unknown-relationship policy and include parameter name to all resources."""
    JsonApiResource.unknown_relationship_policy = settings.unknown_relationship_policy
    JsonApiResource.include_selector = IncludeSelector(settings.include_query_param)
    logger.info(
        f"Resources configured: unknown relationships -> "
        f"{settings.unknown_relationship_policy.value}, "
        f"include parameter '{settings.include_query_param}'",
    )


def _count_meta(link: RelationshipLink) -> None:
    if link.is_to_many:
        link.meta["count"] = len(link.data)


class CompanyResource(JsonApiResource):
    resource_type = "companies"

    def to_attributes(self, request):
        return {"name": self.resource.name}


class UserResource(JsonApiResource):
    resource_type = "users"

    def to_attributes(self, request):
        return {"name": self.resource.name, "email": self.resource.email}

    def to_relationships(self, request):
        return {
            "company": lambda: when_loaded(self.resource, "company", CompanyResource),
        }


class CommentResource(JsonApiResource):
    resource_type = "comments"

    def to_attributes(self, request):
        return {"body": self.resource.body}

    def to_relationships(self, request):
        return {
            "author": lambda: when_loaded(self.resource, "author", UserResource),
        }


class PostResource(JsonApiResource):
    resource_type = "posts"

    def to_attributes(self, request):
        return {"title": self.resource.title, "body": self.resource.body}

    def to_relationships(self, request):
        return {
            "author": lambda: when_loaded(self.resource, "author", UserResource),
            "comments": lambda: when_loaded(
                self.resource, "comments",
                lambda comments: CommentResource.collection(comments)
                .with_relationship_link(_count_meta),
            ),
        }

    def to_links(self, request):
        return {"self": f"/api/v1/posts/{self.resource.id}"}
