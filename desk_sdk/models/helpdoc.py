"""Help-doc site and article models."""

from pydantic import Field

from desk_sdk.models.base import BaseEntity, EntityRef
from desk_sdk.models.included import ListResponse, SingleResponse


class HelpDocSite(BaseEntity):
    name: str | None = None
    subdomain: str | None = None
    public: bool | None = None


class HelpDocSiteResponse(SingleResponse):
    help_doc_site: HelpDocSite = Field(alias="helpdocsite")


class HelpDocSitesResponse(ListResponse):
    help_doc_sites: list[HelpDocSite] = Field(default_factory=list, alias="helpdocsites")


class HelpDocArticle(BaseEntity):
    title: str | None = None
    slug: str | None = None
    contents: str | None = None
    status: str | None = None
    site: EntityRef | None = None
    categories: list[EntityRef] | None = None


class HelpDocArticleResponse(SingleResponse):
    help_doc_article: HelpDocArticle = Field(alias="helpdocarticle")


class HelpDocArticlesResponse(ListResponse):
    help_doc_articles: list[HelpDocArticle] = Field(
        default_factory=list, alias="helpdocarticles"
    )
