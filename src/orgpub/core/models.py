"""Document metadata, render options, and render result models"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OrgOptions(BaseModel):
    """Typed view of an `#+OPTIONS:` line; unknown keys are kept as extras."""
    model_config = ConfigDict(extra="allow")

    toc:         Union[bool, int, None] = None  # False disables, int is a depth
    num:         Optional[bool] = None
    date:        Optional[bool] = None
    author:      Optional[bool] = None
    email:       Optional[bool] = None
    title:       Optional[bool] = None
    H:           Optional[int] = None           # heading-number cutoff
    d:           Optional[bool] = None          # export drawers
    subscript:   Optional[bool] = None          # `_`
    superscript: Optional[bool] = None          # `^`
    tex:         Optional[bool] = None


class Metadata(BaseModel):
    """Document front-matter plus fields derived after parsing."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title:       Optional[str] = None
    author:      Optional[str] = None
    date:        Optional[str] = None
    email:       Optional[str] = None
    description: Optional[str] = None
    keywords:    list[str] = Field(default_factory=list)
    language:    Optional[str] = None
    category:    Optional[str] = None
    tags:        list[str] = Field(default_factory=list)
    options:     OrgOptions = Field(default_factory=OrgOptions)
    properties:  dict[str, str] = Field(default_factory=dict)

    canonical:       Optional[str] = None
    cover_image:     Optional[str] = None
    og_image:        Optional[str] = None
    og_title:        Optional[str] = None
    og_description:  Optional[str] = None
    og_type:         Optional[str] = None
    twitter_card:    Optional[str] = None
    twitter_site:    Optional[str] = None
    twitter_creator: Optional[str] = None
    theme_color:     Optional[str] = None
    robots:          Optional[str] = None

    # derived
    slug:         Optional[str] = None
    reading_time: Optional[int] = None
    word_count:   Optional[int] = None
    excerpt:      Optional[str] = None

    def to_json_dict(self) -> dict[str, Any]:
        """Return a JSON-safe dict with camelCase keys, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RenderOptions(BaseModel):
    sanitize:       bool = True
    code_highlight: bool = True
    toc_depth:      int = Field(default=3, ge=1, le=6, description="Used when #+OPTIONS gives no toc depth")
    component_map:  dict[str, str] = Field(default_factory=dict)  # read by downstream component generators


class HeadingRecord(BaseModel):
    """A rendered heading collected for the table of contents."""
    level: int
    text:  str
    id:    str


class RenderResult(BaseModel):
    html:     str
    metadata: Metadata
