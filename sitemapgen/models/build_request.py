from pydantic import BaseModel, Field, HttpUrl

from sitemapgen.models.options import SitemapOptions


class BuildRequest(BaseModel):
    graphql_url: HttpUrl = Field(description="GraphQL endpoint of the site generator's data layer.")
    path_prefix: str = Field(
        default="",
        description="Prefix joined with a record's slug when no built page matches it.",
    )
    options: SitemapOptions = Field(default_factory=SitemapOptions)
