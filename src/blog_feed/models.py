from datetime import date, datetime, time, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blog_feed.utils.date_parser import RobustDateParser

# Identifier of a post inside its collection.
PostID = str
# Path to the output file.
OutputPath = str

### Post

class PostRecord(BaseModel):
    """
    A post of the content collection.
    """
    id: PostID # The unique slug of the post.
    title: str # The display title of the post.
    published: datetime # The date and time the post was published, in UTC.
    description: str # The short summary of the post.
    category: Optional[str] = None # The single classification label of the post.
    tags: Optional[List[str]] = None # The ordered labels of the post.
    author: Optional[str] = None # The author of the post.
    draft: bool = False # Whether the post is marked as a draft.
    body: str = Field(default="", exclude=True, repr=False) # The Markdown body of the post.

    model_config = ConfigDict(
        frozen = True,
    )

    @field_validator("published", mode="before")
    @classmethod
    def _coerce_published(cls, value):
        """
        Accept YAML dates and free-form date strings as well as datetimes.
        """
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time.min, tzinfo=timezone.utc)
        if isinstance(value, str):
            parsed = RobustDateParser().parse_date(value)
            if parsed is None:
                raise ValueError(f"Unparseable publication date: \"{value}\"")
            return parsed
        return value

    @field_validator("published")
    @classmethod
    def _normalize_published(cls, value: datetime) -> datetime:
        # Naive datetimes are taken as UTC.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

### Feed

class FeedItem(BaseModel):
    """
    Item in the syndication feed, derived from a single post.
    """
    title: str # The title of the item.
    pub_date: datetime # The date and time the item was published.
    link: str # The site-relative link of the item.
    description: str # The summary of the item.
    category: Optional[str] # The category of the post.
    author: Optional[str] = None # The author of the post.
    categories: List[Optional[str]] # The category followed by the tags of the post.

class FeedDocument(BaseModel):
    """
    Syndication feed document.
    """
    title: str # The title of the feed.
    description: str # The description of the feed.
    site: str # The base URL of the site.
    items: List[FeedItem] # The items of the feed, in collection order.

### Output

class OutputType(BaseModel):
    """
    An output type.
    """
    template_name: str # The name of the template to use.
    relative_output_path: OutputPath # The relative path inside the output folder where the output will be saved.

    model_config = ConfigDict(
        frozen = True,
    )

### Site

class SiteConfig(BaseModel):
    """
    Metadata of the site, as declared in the site configuration file.
    """
    title: str # The title of the site.
    sub_title: Optional[str] = Field(default=None, alias="subTitle") # The subtitle shown under the title.
    description: str = "" # The description of the site.
    site: Optional[str] = None # The base URL the site is deployed to.
    locale: str = "en" # The language of the site.
    username: Optional[str] = None # The name of the blog owner.

    model_config = ConfigDict(
        frozen = True,
        populate_by_name = True,
        extra = "ignore",
    )

### App

class AppEnvSettings(BaseSettings):
    """
    App settings from environment variables.
    """
    content_dir: Optional[str] = None # The directory holding the content collections.
    site_config: Optional[str] = None # The path of the site configuration file.
    output_dir: Optional[str] = None # The directory to save the output.
    site: Optional[str] = None # The base URL of the site, overriding the site configuration.
    use_site_metadata: bool = False # Take the feed title and description from the site configuration.

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
        extra="ignore",
    )

class AppConfig(BaseModel):
    """
    Global app config.
    """
    content_dir: str # The directory holding the content collections.
    output_dir: str # The directory to save the output.
    site: str # The base URL of the site.
    site_config: SiteConfig # The site configuration.
    use_site_metadata: bool = False # Take the feed title and description from the site configuration.

    model_config = ConfigDict(
        frozen = True,
    )
