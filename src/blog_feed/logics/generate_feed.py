import logging
from typing import List, Sequence

from blog_feed.models import FeedDocument, FeedItem, PostRecord

# Prefix of the route every post is served under.
POST_LINK_PREFIX = "/posts/"
# Feed metadata used unless the site configuration is requested explicitly.
PLACEHOLDER_TITLE = "a"
PLACEHOLDER_DESCRIPTION = "a"

def generate_feed_item(
    post: PostRecord, # The post to map
) -> FeedItem:
    """
    Map a single post to a feed item.
    """
    categories = [post.category, *post.tags] if post.tags else [post.category]
    return FeedItem(
        title=post.title,
        pub_date=post.published,
        link=f"{POST_LINK_PREFIX}{post.id}",
        description=post.description,
        category=post.category,
        author=post.author,
        categories=categories,
    )

def generate_feed(
    posts: Sequence[PostRecord], # The posts of the collection, in collection order
    site: str, # The base URL of the site
    title: str = PLACEHOLDER_TITLE, # The title of the feed
    description: str = PLACEHOLDER_DESCRIPTION, # The description of the feed
) -> FeedDocument:
    """
    Generate the syndication feed for a collection of posts.

    Every post becomes one item, in input order. Nothing is filtered, sorted or validated.
    """
    logging.info(f"Generating feed for {site} from {len(posts)} posts")

    items: List[FeedItem] = [generate_feed_item(post) for post in posts]

    return FeedDocument(
        title=title,
        description=description,
        site=site,
        items=items,
    )
