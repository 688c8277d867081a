# src/mets_sync/social_sync.py
# Latest hashtag posts from the Bluesky public search API.

import logging

from .http_client import BLUESKY_API_BASE
from .sync_config import SyncConfig

logger = logging.getLogger(__name__)

SEARCH_URL = f"{BLUESKY_API_BASE}/app.bsky.feed.searchPosts"
POST_LINK = "https://bsky.app/profile/{handle}/post/{key}"

IMAGES_VIEW = 'app.bsky.embed.images#view'
RECORD_WITH_MEDIA_VIEW = 'app.bsky.embed.recordWithMedia#view'


def fetch_posts(client, config: SyncConfig) -> list:
    """Returns the newest posts matching the configured hashtag."""
    params = {
        'q': config.hashtag,
        'limit': config.social_limit,
        'sort': 'latest',
    }
    data = client.get_json(SEARCH_URL, params=params)
    return data.get('posts') or []


def post_key(uri: str) -> str:
    """
    Document key for a post: the last path segment of its URI
    (at://did:plc:abc/app.bsky.feed.post/3kxyz -> 3kxyz).
    """
    key = (uri or '').rstrip('/').rsplit('/', 1)[-1]
    if not key:
        raise ValueError(f"Cannot derive a post key from URI {uri!r}")
    return key


def first_image(embed: dict | None) -> str | None:
    """URL of the first embedded image, or None when the post has no image."""
    if not embed:
        return None

    embed_type = embed.get('$type')
    if embed_type == RECORD_WITH_MEDIA_VIEW:
        return first_image(embed.get('media'))
    if embed_type != IMAGES_VIEW:
        return None

    images = embed.get('images') or []
    if not images:
        return None
    return images[0].get('fullsize') or images[0].get('thumb')


def build_post_document(post: dict) -> tuple[str, dict]:
    """Maps one search result to its (key, document) pair."""
    key = post_key(post['uri'])
    author = post['author']
    record = post.get('record') or {}
    handle = author['handle']

    document = {
        'authorName': author.get('displayName') or handle,
        'handle': handle,
        'avatar': author.get('avatar'),
        'text': record.get('text', ''),
        'timestamp': record.get('createdAt') or post.get('indexedAt'),
        'image': first_image(post.get('embed')),
        'link': POST_LINK.format(handle=handle, key=key),
        'type': 'bluesky',
    }
    return key, document


def sync_social(client, store, config: SyncConfig) -> int:
    """Upserts the latest matching posts. Older posts already stored are kept."""
    logger.info(f"Fetching latest {config.social_limit} posts for {config.hashtag}...")
    posts = fetch_posts(client, config)
    documents = dict(build_post_document(post) for post in posts)
    written = store.upsert_batch(config.social_collection, documents)
    logger.info(f"Updated {written} social posts.")
    return written
